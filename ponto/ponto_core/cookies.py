"""
Cookie store and cookie header codecs.

The file holds the session exactly as it is sent: "name=value; name=value".
"""

from pathlib import Path

from .config import log, atomic_write_text, COOKIE_FILE
from .errors import StorageError


# ─── Header codecs ───────────────────────────────────────────────

def parse_cookie_string(cookie_string):
    """Parse a Cookie header ("a=1; b=2") into a dict."""
    cookies = {}
    if not cookie_string or not cookie_string.strip():
        return cookies

    for pair in cookie_string.split(";"):
        name, sep, value = pair.strip().partition("=")
        name, value = name.strip(), value.strip()
        if sep and name and value:
            cookies[name] = value
    return cookies


def serialize_cookies(cookies):
    """Inverse of parse_cookie_string."""
    if not cookies:
        return ""
    return "; ".join(f"{name}={value}" for name, value in cookies.items())


def parse_set_cookie_headers(set_cookie_headers):
    """
    Collect name/value pairs from raw Set-Cookie headers.

    Attributes (Path, HttpOnly, ...) are dropped. A header whose first
    segment is not name=value is skipped without failing the batch.
    """
    cookies = {}
    for header in set_cookie_headers or ():
        first = header.split(";", 1)[0]
        name, sep, value = first.partition("=")
        name, value = name.strip(), value.strip()
        if not sep or not name or not value:
            log.debug("Skipping malformed Set-Cookie header")
            continue
        cookies[name] = value
    return cookies


def _own_set_cookie_headers(response):
    raw = getattr(response, "raw", None)
    headers = getattr(raw, "headers", None)
    if headers is not None and hasattr(headers, "getlist"):
        return headers.getlist("Set-Cookie")
    value = response.headers.get("Set-Cookie")
    return [value] if value else []


def get_set_cookie_headers(response):
    """
    Every Set-Cookie header of a requests.Response, unmerged.

    Redirect hops (response.history) come first so the final response
    wins on duplicate names.
    """
    headers = []
    for hop in list(getattr(response, "history", None) or []) + [response]:
        headers.extend(_own_set_cookie_headers(hop))
    return headers


# ─── Store ───────────────────────────────────────────────────────

class CookieStore:
    """Persists the current session cookie set, replaced wholesale."""

    def __init__(self, path=COOKIE_FILE):
        self.path = Path(path)

    def load(self):
        """Returns the saved cookies, or {} if missing/unreadable."""
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Ignoring unreadable cookie file %s: %s", self.path, e)
            return {}
        return parse_cookie_string(content.strip())

    def save(self, cookies):
        try:
            atomic_write_text(self.path, serialize_cookies(cookies))
        except OSError as e:
            raise StorageError(f"Erro ao salvar cookies em {self.path}: {e}", path=self.path) from e
        log.info("Saved %d session cookie(s)", len(cookies))

    def clear(self):
        """
        Forget the session so the next load() sees none.

        Best effort: a failed write is logged and reported as False,
        never raised.
        """
        try:
            if self.path.exists():
                self.path.write_text("", encoding="utf-8")
            log.info("Session cookies cleared")
            return True
        except OSError as e:
            log.warning("Failed to clear cookie file %s: %s", self.path, e)
            return False
