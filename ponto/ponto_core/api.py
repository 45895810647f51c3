"""
Clock-in protocol: submit the signed registro with the current session.

A 401/403 means the session expired server-side (the portal gives no TTL).
The cookie file is cleared, a fresh session is fetched, and the same form
is submitted exactly once more. Anything else is terminal.
"""

from dataclasses import dataclass
from datetime import datetime

import requests

from .config import log
from .constants import (
    CLOCK_IN_PATH, API_TIMEOUT_CLOCK_IN, SESSION_EXPIRED_STATUSES,
    FIELD_REGISTRO, FIELD_UTMP,
)
from .cookies import serialize_cookies
from .credentials import load_credentials
from .errors import (
    LocalCredentialsMissingError, CredentialsIncompleteError,
    ClockInTransportError, ClockInRejectedError,
)
from .http_client import is_success
from .session import SessionManager
from .token_codec import encode_clock_in_token, format_timestamp


@dataclass
class ClockInResult:
    timestamp: str
    status_code: int
    retried: bool = False


class ClockInClient:
    def __init__(self, session_manager=None, credentials_loader=None, http=None, clock=None):
        self.session_manager = session_manager or SessionManager(
            http=http, credentials_loader=credentials_loader,
        )
        self.credentials_loader = credentials_loader or load_credentials
        self.http = http or self.session_manager.http
        self.clock = clock or datetime.now

    @property
    def clock_in_url(self):
        return f"{self.session_manager.base_url}{CLOCK_IN_PATH}"

    def _load_credentials(self):
        credentials = self.credentials_loader()
        if credentials is None:
            raise LocalCredentialsMissingError()
        if not credentials.is_complete():
            raise CredentialsIncompleteError()
        return credentials

    def _submit(self, form, cookies):
        try:
            return self.http.post(
                self.clock_in_url,
                data=form,
                headers={"Cookie": serialize_cookies(cookies)},
                timeout=API_TIMEOUT_CLOCK_IN,
            )
        except requests.RequestException as e:
            log.error("Clock-in network error: %s", e)
            raise ClockInTransportError() from e

    @staticmethod
    def _rejected(resp):
        log.error("Clock-in FAILED: HTTP %d: %s", resp.status_code, resp.text[:200])
        return ClockInRejectedError(
            status=resp.status_code, reason=resp.reason, body=resp.text,
        )

    def clock_in(self, force_refresh=False):
        """Register one clock event. Returns ClockInResult or raises PontoError."""
        # Checked before the session so an incomplete setup never hits the network
        credentials = self._load_credentials()
        cookies = self.session_manager.get_session(force_refresh)

        timestamp = format_timestamp(self.clock())
        form = {
            "mydata": "",
            "latitude": "",
            "longitude": "",
            FIELD_UTMP: timestamp,
            FIELD_REGISTRO: encode_clock_in_token(
                timestamp, credentials.emp, credentials.funcionario,
            ),
        }

        resp = self._submit(form, cookies)
        if is_success(resp):
            log.info("Clock-in OK at %s", timestamp)
            return ClockInResult(timestamp, resp.status_code)

        if resp.status_code not in SESSION_EXPIRED_STATUSES:
            raise self._rejected(resp)

        log.warning("Clock-in got HTTP %d, session expired, re-authenticating once", resp.status_code)
        self.session_manager.invalidate()
        cookies = self.session_manager.get_session(force_refresh=True)

        retry = self._submit(form, cookies)
        if not is_success(retry):
            raise self._rejected(retry)

        log.info("Clock-in OK at %s (after re-authentication)", timestamp)
        return ClockInResult(timestamp, retry.status_code, retried=True)
