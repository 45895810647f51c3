"""
Shared fixtures: isolated config dir, fake portal HTTP, wired clients.
"""

import json
from datetime import datetime

import pytest

from ponto_core.api import ClockInClient
from ponto_core.cookies import CookieStore
from ponto_core.credentials import load_credentials
from ponto_core.session import SessionManager
from tests.classes_mocks import FakeHttp

BASE_URL = "https://portal.test"
FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5)


@pytest.fixture
def credentials_file(tmp_path):
    return tmp_path / "config.json"


@pytest.fixture
def write_credentials(credentials_file):
    def _write(**fields):
        credentials_file.write_text(json.dumps(fields), encoding="utf-8")
        return credentials_file
    return _write


@pytest.fixture
def cookie_store(tmp_path):
    return CookieStore(tmp_path / "cookies.txt")


@pytest.fixture
def fake_http():
    return FakeHttp()


@pytest.fixture
def session_manager(fake_http, cookie_store, credentials_file):
    return SessionManager(
        http=fake_http,
        cookie_store=cookie_store,
        credentials_loader=lambda: load_credentials(credentials_file),
        base_url=BASE_URL,
    )


@pytest.fixture
def client(session_manager, credentials_file, fake_http):
    return ClockInClient(
        session_manager=session_manager,
        credentials_loader=lambda: load_credentials(credentials_file),
        http=fake_http,
        clock=lambda: FIXED_NOW,
    )
