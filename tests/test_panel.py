"""Tests for the dashboard, sidebar and page initialization."""

import logging

import httpx
import pytest

from guvohnoma_admin import AdminPanel, DashboardLoader, MemoryStorage, SessionContext, SidebarController

from conftest import (
    DOCUMENT_ADD_HTML,
    DOCUMENTS_LIST_HTML,
    INDEX_HTML,
    LOGIN_HTML,
    STUDENT_EDIT_HTML,
    STUDENTS_LIST_HTML,
)

logger = logging.getLogger(__name__)


@pytest.mark.asyncio
async def test_load_dashboard(async_client, api, notifier, make_page):
    api.dashboard = {"users": 2, "students": 40, "documents": 31}
    page = make_page(INDEX_HTML)

    dashboard = await DashboardLoader(async_client, page, notifier).load_dashboard()

    assert dashboard.students == 40
    assert page.text("usersCount") == "2"
    assert page.text("studentsCount") == "40"
    assert page.text("documentsCount") == "31"


@pytest.mark.asyncio
async def test_load_dashboard_failure_shows_zeros(async_client, api, notifier, make_page):
    api.failures[("GET", "/api/dashboard")] = httpx.Response(500, text="Database error")
    page = make_page(INDEX_HTML)

    await DashboardLoader(async_client, page, notifier).load_dashboard()

    for element_id in ("usersCount", "studentsCount", "documentsCount"):
        assert page.text(element_id) == "0"


def test_sidebar_toggle_persists(make_page):
    session = SessionContext(MemoryStorage())
    page = make_page(INDEX_HTML)
    sidebar = SidebarController(page, session)

    assert sidebar.toggle() is True
    assert "toggle-sidebar" in page.body["class"]
    assert "collapsed" in page.element("sidebar")["class"]
    assert session.storage.get("sidebarCollapsed") == "true"

    assert sidebar.toggle() is False
    assert not page.body.has_attr("class")
    assert page.element("sidebar")["class"] == ["sidebar"]
    assert session.storage.get("sidebarCollapsed") == "false"


def test_sidebar_restore(make_page):
    session = SessionContext(MemoryStorage({"sidebarCollapsed": "true"}))

    page = make_page(INDEX_HTML)
    assert SidebarController(page, session).restore(viewport_width=1280) is True
    assert "collapsed" in page.element("sidebar")["class"]

    session.set_sidebar_collapsed(False)
    page = make_page(INDEX_HTML)
    assert SidebarController(page, session).restore(viewport_width=1280) is False
    assert SidebarController(page, session).restore(viewport_width=768) is True
    assert session.sidebar_collapsed is False


def test_sidebar_missing_elements(make_page):
    sidebar = SidebarController(make_page(LOGIN_HTML), SessionContext())

    assert sidebar.available is False
    assert sidebar.toggle() is False


@pytest.mark.asyncio
async def test_open_index_page(async_client, api, make_page):
    api.dashboard = {"users": 1, "students": 2, "documents": 3}
    panel = AdminPanel(client=async_client, session=SessionContext(MemoryStorage({"sidebarCollapsed": "true"})))
    page = make_page(INDEX_HTML, url="index.html")

    controllers = await panel.open_page(page)

    assert controllers.dashboard is not None
    assert controllers.documents is None
    assert page.text("documentsCount") == "3"
    assert "toggle-sidebar" in page.body["class"]

    await page.dispatch("toggle-sidebar-btn", "click")
    assert panel.session.sidebar_collapsed is False


@pytest.mark.asyncio
async def test_open_documents_list_page(async_client, api, make_page):
    api.add_document()
    panel = AdminPanel(client=async_client)
    page = make_page(DOCUMENTS_LIST_HTML, url="Guvohnomalar-list.html")

    controllers = await panel.open_page(page)

    assert controllers.documents is not None
    assert controllers.students is None
    assert page.text("totalCertificates") == "1"


@pytest.mark.asyncio
async def test_open_add_page_binds_submit(async_client, api, make_page):
    panel = AdminPanel(client=async_client)
    page = make_page(DOCUMENT_ADD_HTML, url="Guvohnomalar-add.html")

    await panel.open_page(page)

    assert page.is_bound("addCertificateForm", "submit")
    assert api.requests == []


@pytest.mark.asyncio
async def test_open_students_pages(async_client, api, make_page):
    api.add_student()
    panel = AdminPanel(client=async_client)

    page = make_page(STUDENTS_LIST_HTML, url="students-list.html")
    controllers = await panel.open_page(page)
    assert controllers.students is not None
    assert page.text("totalStudents") == "1"

    page = make_page(STUDENT_EDIT_HTML, url="students-edit.html?jshshir=12345678901234")
    await panel.open_page(page)
    assert page.value("editFullName") == "Aliyev Vali"
    assert page.is_bound("editStudentForm", "submit")


@pytest.mark.asyncio
async def test_open_login_page(async_client, make_page):
    panel = AdminPanel(client=async_client, login="Anvar", password="1727")
    page = make_page(LOGIN_HTML, url="login.html")

    controllers = await panel.open_page(page)

    assert controllers.login is panel.gate
    assert page.navigations == []

    page.set_value("login", "Anvar")
    page.set_value("password", "1727")
    assert await page.dispatch("btnLogin", "click") == [True]
    assert page.last_navigation.url == "index.html"
    assert panel.session.is_authenticated


@pytest.mark.asyncio
async def test_open_login_page_when_authenticated(async_client, make_page):
    panel = AdminPanel(client=async_client, session=SessionContext(MemoryStorage({"isAuth": "true"})))
    page = make_page(LOGIN_HTML, url="login.html")

    await panel.open_page(page)

    assert page.last_navigation.url == "index.html"
    assert not page.is_bound("btnLogin", "click")
