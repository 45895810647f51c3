"""
Session manager: cache hits, forced refresh, auth failure modes.
"""

import pytest
import requests

from ponto_core.errors import (
    LocalCredentialsMissingError, CredentialsIncompleteError,
    AuthTransportError, AuthRejectedError,
)
from ponto_core.session import SessionState
from tests.classes_mocks import AUTH_PATH, FakeResponse, auth_ok


@pytest.fixture
def with_credentials(write_credentials):
    write_credentials(emp="E1", cpf="12345678900", funcionario="F1")


def test_second_get_session_is_a_cache_hit(with_credentials, session_manager, fake_http, cookie_store):
    fake_http.queue(AUTH_PATH, auth_ok("PHPSESSID=abc; path=/", "lb=n1"))

    first = session_manager.get_session()
    second = session_manager.get_session()

    assert first == second == {"PHPSESSID": "abc", "lb": "n1"}
    assert len(fake_http.calls_to(AUTH_PATH)) == 1
    assert cookie_store.load() == first
    assert session_manager.state is SessionState.HAS_SESSION


def test_auth_posts_company_and_cpf(with_credentials, session_manager, fake_http):
    fake_http.queue(AUTH_PATH, auth_ok())
    session_manager.get_session()

    call = fake_http.calls_to(AUTH_PATH)[0]
    assert call["url"] == "https://portal.test/registrar/auth"
    assert call["data"] == {"emp": "E1", "cpf": "12345678900"}


def test_cached_cookies_skip_network(session_manager, fake_http, cookie_store):
    # No credentials needed when the cache already holds a session
    cookie_store.save({"PHPSESSID": "cached"})
    assert session_manager.get_session() == {"PHPSESSID": "cached"}
    assert fake_http.calls == []


def test_force_refresh_always_authenticates(with_credentials, session_manager, fake_http, cookie_store):
    cookie_store.save({"PHPSESSID": "stale"})
    fake_http.queue(AUTH_PATH, auth_ok("PHPSESSID=fresh"), auth_ok("PHPSESSID=fresher"))

    assert session_manager.get_session(force_refresh=True) == {"PHPSESSID": "fresh"}
    assert session_manager.get_session(force_refresh=True) == {"PHPSESSID": "fresher"}
    assert len(fake_http.calls_to(AUTH_PATH)) == 2
    assert cookie_store.load() == {"PHPSESSID": "fresher"}


def test_new_session_replaces_old_set(with_credentials, session_manager, fake_http, cookie_store):
    cookie_store.save({"old": "1", "PHPSESSID": "stale"})
    fake_http.queue(AUTH_PATH, auth_ok("PHPSESSID=new"))

    session_manager.get_session(force_refresh=True)
    assert cookie_store.load() == {"PHPSESSID": "new"}


def test_malformed_set_cookie_is_dropped(with_credentials, session_manager, fake_http):
    fake_http.queue(AUTH_PATH, auth_ok("broken; path=/", "ok=1; HttpOnly"))
    assert session_manager.get_session() == {"ok": "1"}


def test_requests_cookie_jar_is_emptied(with_credentials, session_manager, fake_http):
    fake_http.queue(AUTH_PATH, auth_ok())
    session_manager.get_session()
    assert len(fake_http.cookies) == 0


def test_missing_credentials(session_manager, fake_http):
    with pytest.raises(LocalCredentialsMissingError):
        session_manager.get_session()
    assert fake_http.calls == []


@pytest.mark.parametrize("fields", [
    {"emp": "", "cpf": "1"},
    {"emp": "1", "cpf": ""},
    {"emp": "1"},
])
def test_incomplete_credentials(write_credentials, session_manager, fake_http, fields):
    write_credentials(**fields)
    with pytest.raises(CredentialsIncompleteError):
        session_manager.get_session()
    assert fake_http.calls == []


def test_transport_failure(with_credentials, session_manager, fake_http, cookie_store):
    fake_http.queue(AUTH_PATH, requests.ConnectionError("dns failure"))

    with pytest.raises(AuthTransportError) as exc_info:
        session_manager.get_session()
    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)
    assert not cookie_store.path.exists()


def test_rejected_status(with_credentials, session_manager, fake_http, cookie_store):
    fake_http.queue(AUTH_PATH, FakeResponse(500, reason="Internal Server Error"))

    with pytest.raises(AuthRejectedError) as exc_info:
        session_manager.get_session()
    assert exc_info.value.status == 500
    assert exc_info.value.reason == "Internal Server Error"
    assert not cookie_store.path.exists()
    assert session_manager.state is SessionState.NO_SESSION


def test_invalidate(session_manager, cookie_store):
    cookie_store.save({"PHPSESSID": "abc"})
    session_manager.get_session()

    assert session_manager.invalidate() is True
    assert session_manager.state is SessionState.NO_SESSION
    assert cookie_store.load() == {}


@pytest.mark.parametrize("status", [302, 304])
def test_unfollowed_redirect_is_auth_failure(with_credentials, session_manager, fake_http, cookie_store, status):
    fake_http.queue(AUTH_PATH, FakeResponse(status, set_cookies=["PHPSESSID=abc"]))

    with pytest.raises(AuthRejectedError) as exc_info:
        session_manager.get_session()
    assert exc_info.value.status == status
    assert not cookie_store.path.exists()


def test_cookies_set_during_redirect_are_kept(with_credentials, session_manager, fake_http):
    hop = FakeResponse(302, set_cookies=["PHPSESSID=from-redirect; path=/", "lb=old"])
    fake_http.queue(AUTH_PATH, FakeResponse(200, set_cookies=["lb=new"], history=[hop]))

    assert session_manager.get_session() == {"PHPSESSID": "from-redirect", "lb": "new"}
