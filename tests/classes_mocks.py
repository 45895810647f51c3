"""
Fake HTTP layer for the portal.

FakeHttp stands in for a requests.Session: it records every POST and
replays scripted responses per endpoint path.
"""

import base64
import json
from collections import defaultdict, deque
from urllib.parse import urlparse

from requests.cookies import RequestsCookieJar
from urllib3._collections import HTTPHeaderDict

AUTH_PATH = "/registrar/auth"
CLOCK_IN_PATH = "/registrar/grava"


class _Raw:
    def __init__(self, headers):
        self.headers = headers


class FakeResponse:
    """Minimal requests.Response look-alike."""

    def __init__(self, status_code=200, text="", reason=None, set_cookies=(), history=()):
        self.history = list(history)
        self.status_code = status_code
        self.text = text
        self.reason = reason or ("OK" if status_code < 400 else "Error")
        raw_headers = HTTPHeaderDict()
        for value in set_cookies:
            raw_headers.add("Set-Cookie", value)
        self.raw = _Raw(raw_headers)
        self.headers = {}
        if set_cookies:
            self.headers["Set-Cookie"] = ", ".join(set_cookies)

    @property
    def ok(self):
        # Same rule as requests: unfollowed redirects count as ok
        return self.status_code < 400


class FakeHttp:
    """Records POSTs and replays queued responses (or raises queued exceptions)."""

    def __init__(self):
        self.cookies = RequestsCookieJar()
        self.calls = []
        self._queues = defaultdict(deque)

    def queue(self, path, *outcomes):
        self._queues[path].extend(outcomes)
        return self

    def calls_to(self, path):
        return [c for c in self.calls if urlparse(c["url"]).path == path]

    def post(self, url, data=None, headers=None, timeout=None):
        path = urlparse(url).path
        self.calls.append({"url": url, "data": data, "headers": headers or {}, "timeout": timeout})
        # Simulate the jar filling up like a real session would
        self.cookies.set("jar_cookie", "leak")
        if not self._queues[path]:
            raise AssertionError(f"Unexpected POST to {path}")
        outcome = self._queues[path].popleft()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def auth_ok(*set_cookies, text=""):
    cookies = set_cookies or ("PHPSESSID=abc123; path=/; HttpOnly",)
    return FakeResponse(200, text=text, set_cookies=cookies)


def registration_page(funcionario="F1", emp="E1"):
    token = base64.b64encode(
        json.dumps({"funcionario": funcionario, "key": emp}).encode("utf-8")
    ).decode("ascii")
    return (
        "<html><body><form method='post' action='/registrar/grava'>"
        f"<input type=\"hidden\" name=\"registro\" value=\"{token}\">"
        "</form></body></html>"
    )
