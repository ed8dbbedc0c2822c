"""Tests for session storage and the login gate."""

import json
import logging

import pytest

from guvohnoma_admin import FileStorage, LoginGate, MemoryStorage, NullStorage, SessionContext
from guvohnoma_admin.exceptions import AuthenticationError

from conftest import LOGIN_HTML

logger = logging.getLogger(__name__)


def test_null_storage():
    storage = NullStorage()
    storage.set("isAuth", "true")

    assert storage.get("isAuth") is None


def test_memory_storage():
    storage = MemoryStorage({"sidebarCollapsed": "false"})
    storage.set("isAuth", "true")

    assert storage.get("isAuth") == "true"
    assert storage.get("sidebarCollapsed") == "false"

    storage.delete("isAuth")
    storage.delete("missing")
    assert storage.get("isAuth") is None

    storage.clear()
    assert storage.get("sidebarCollapsed") is None


def test_file_storage(tmp_path):
    """Test that file storage survives a new backend instance."""
    path = tmp_path / "state" / "storage.json"

    storage = FileStorage(path)
    storage.set("isAuth", "true")
    storage.set("sidebarCollapsed", "false")

    assert json.loads(path.read_text()) == {"isAuth": "true", "sidebarCollapsed": "false"}
    assert FileStorage(path).get("isAuth") == "true"

    storage.delete("isAuth")
    assert FileStorage(path).get("isAuth") is None

    storage.clear()
    assert not path.exists()
    assert storage.get("sidebarCollapsed") is None


def test_file_storage_corrupt_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json")

    storage = FileStorage(path)

    assert storage.get("isAuth") is None
    storage.set("isAuth", "true")
    assert storage.get("isAuth") == "true"


def test_session_context():
    session = SessionContext()

    assert session.is_authenticated is False
    assert session.sidebar_collapsed is False

    session.mark_authenticated()
    session.set_sidebar_collapsed(True)
    assert session.storage.get("isAuth") == "true"
    assert session.sidebar_collapsed is True

    session.logout()
    assert session.is_authenticated is False


def test_login_gate_defaults(monkeypatch):
    monkeypatch.delenv("GUVOHNOMA_ADMIN_LOGIN", raising=False)
    monkeypatch.delenv("GUVOHNOMA_ADMIN_PASSWORD", raising=False)
    session = SessionContext()
    gate = LoginGate(session)

    with pytest.raises(AuthenticationError, match="Login yoki parol noto‘g‘ri"):
        gate.login("Anvar", "0000")
    assert session.is_authenticated is False

    gate.login("Anvar", "1727")
    assert session.is_authenticated is True


def test_login_gate_from_environment(monkeypatch):
    monkeypatch.setenv("GUVOHNOMA_ADMIN_LOGIN", "admin")
    monkeypatch.setenv("GUVOHNOMA_ADMIN_PASSWORD", "secret")
    gate = LoginGate(SessionContext())

    with pytest.raises(AuthenticationError):
        gate.login("Anvar", "1727")

    gate.login("admin", "secret")


def test_login_gate_submit(make_page):
    session = SessionContext()
    gate = LoginGate(session, login="Anvar", password="1727")
    page = make_page(LOGIN_HTML, url="login.html")

    page.set_value("login", "Anvar")
    page.set_value("password", "wrong")
    assert gate.submit(page) is False
    assert page.text("error") == "Login yoki parol noto‘g‘ri"
    assert page.navigations == []

    page.set_value("password", "1727")
    assert gate.submit(page) is True
    assert page.last_navigation.url == "index.html"


def test_redirect_if_authenticated(make_page):
    session = SessionContext(MemoryStorage())
    gate = LoginGate(session)
    page = make_page(LOGIN_HTML, url="login.html")

    assert gate.redirect_if_authenticated(page) is False

    session.mark_authenticated()
    assert gate.redirect_if_authenticated(page) is True
    assert page.last_navigation.url == "index.html"
