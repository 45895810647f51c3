"""
HTTP session with connection pooling, transport retry and CA bundle lookup.

The urllib3 Retry only covers gateway errors (502/503/504). Session expiry
(401/403) is handled by the clock-in protocol, never by the adapter.
"""

import os
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .constants import USER_AGENT

_retry_strategy = Retry(
    total=3,
    backoff_factor=1,                           # Wait 1s, 2s, 4s between retries
    status_forcelist=[502, 503, 504],
    allowed_methods=["HEAD", "GET"],           # POSTs are only retried on connect errors
    raise_on_status=False,
)


def _get_ca_bundle():
    """Get the CA bundle path.

    Priority: env var → certifi → system default.
    """
    env_ca = os.environ.get('REQUESTS_CA_BUNDLE') or os.environ.get('SSL_CERT_FILE')
    if env_ca and os.path.isfile(env_ca):
        return env_ca
    try:
        import certifi
        return certifi.where()
    except ImportError:
        return True


def create_session():
    """Create a new requests.Session with connection pooling, retry, and SSL."""
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=1,
        pool_maxsize=2,
        max_retries=_retry_strategy,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = _get_ca_bundle()
    session.headers["User-Agent"] = USER_AGENT
    return session


# Global shared session
http = create_session()


def is_success(resp):
    """2xx only. requests' `ok` also accepts unfollowed 3xx responses."""
    return 200 <= resp.status_code < 300
