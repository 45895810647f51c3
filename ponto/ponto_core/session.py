"""
Session manager: load-or-fetch the portal session cookies.

  NO_SESSION  ──auth POST ok──▶  HAS_SESSION
  HAS_SESSION ──invalidate()──▶  NO_SESSION

The cookie file is the only place session state lives. The requests
session's own jar is emptied after every auth call so nothing leaks
between the cached set and the next request.
"""

import enum

import requests

from .config import log, get_base_url
from .constants import AUTH_PATH, API_TIMEOUT_AUTH, FIELD_COMPANY, FIELD_CPF
from .cookies import CookieStore, parse_set_cookie_headers, get_set_cookie_headers
from .credentials import load_credentials
from .errors import (
    LocalCredentialsMissingError, CredentialsIncompleteError,
    AuthTransportError, AuthRejectedError,
)
from . import http_client
from .http_client import is_success


class SessionState(enum.Enum):
    NO_SESSION = "no_session"
    HAS_SESSION = "has_session"


class SessionManager:
    def __init__(self, http=None, cookie_store=None, credentials_loader=None, base_url=None):
        self.http = http or http_client.http
        self.cookie_store = cookie_store or CookieStore()
        self.credentials_loader = credentials_loader or load_credentials
        self.base_url = (base_url or get_base_url()).rstrip("/")
        self.state = SessionState.NO_SESSION

    @property
    def auth_url(self):
        return f"{self.base_url}{AUTH_PATH}"

    def authenticate(self, emp, cpf):
        """
        POST the login form and return the raw response.

        Raises AuthTransportError when no response arrives and
        AuthRejectedError on a non-2xx status.
        """
        log.info("Authenticating at %s", self.auth_url)
        try:
            resp = self.http.post(
                self.auth_url,
                data={FIELD_COMPANY: emp, FIELD_CPF: cpf},
                timeout=API_TIMEOUT_AUTH,
            )
        except requests.RequestException as e:
            log.warning("Auth network error: %s", e)
            raise AuthTransportError() from e
        finally:
            self.http.cookies.clear()

        if not is_success(resp):
            log.error("Auth REJECTED: HTTP %d %s", resp.status_code, resp.reason)
            raise AuthRejectedError(status=resp.status_code, reason=resp.reason)
        return resp

    def get_session(self, force_refresh=False):
        """Return the cached cookie set, or authenticate for a fresh one."""
        if not force_refresh:
            cookies = self.cookie_store.load()
            if cookies:
                log.debug("Using cached session (%d cookie(s))", len(cookies))
                self.state = SessionState.HAS_SESSION
                return cookies
        else:
            log.info("Forcing session refresh")

        credentials = self.credentials_loader()
        if credentials is None:
            raise LocalCredentialsMissingError()
        if not credentials.can_authenticate():
            raise CredentialsIncompleteError()

        resp = self.authenticate(credentials.emp, credentials.cpf)
        cookies = parse_set_cookie_headers(get_set_cookie_headers(resp))
        if not cookies:
            log.warning("Auth succeeded but returned no session cookies")
        self.cookie_store.save(cookies)
        self.state = SessionState.HAS_SESSION if cookies else SessionState.NO_SESSION
        log.info("Session established (%d cookie(s))", len(cookies))
        return cookies

    def invalidate(self):
        """Drop the cached session. Never raises; returns whether the clear worked."""
        self.state = SessionState.NO_SESSION
        return self.cookie_store.clear()
