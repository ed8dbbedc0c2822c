"""Admin panel entry point: wires controllers to a loaded page."""

import logging

from .auth import LoginGate, SessionContext
from .client import AsyncGuvohnomaClient
from .controllers import (
    DashboardLoader,
    DocumentsController,
    RequestTokens,
    SidebarController,
    StudentsController,
)
from .controllers import documents as documents_page
from .controllers import students as students_page
from .controllers.layout import TOGGLE_BUTTON_CLASS
from .notifications import Notifier, PageNotifier
from .page import Page

logger = logging.getLogger(__name__)

LOGIN_BUTTON_ID = "btnLogin"
DASHBOARD_MARKER_ID = "usersCount"


class PageControllers:
    """Controllers attached to one page by AdminPanel.open_page."""

    def __init__(self, page: Page, notifier: Notifier, sidebar: SidebarController):
        self.page = page
        self.notifier = notifier
        self.sidebar = sidebar
        self.dashboard: DashboardLoader | None = None
        self.documents: DocumentsController | None = None
        self.students: StudentsController | None = None
        self.login: LoginGate | None = None


class AdminPanel:
    """Admin panel session bound to one API client."""

    def __init__(
        self,
        client: AsyncGuvohnomaClient | None = None,
        session: SessionContext | None = None,
        login: str | None = None,
        password: str | None = None,
    ):
        """Initialize admin panel.

        Args:
            client: Async API client (default: new client for GUVOHNOMA_API_URL)
            session: Session context (default: in-memory session)
            login: Expected login for the login gate (default: env var or built-in)
            password: Expected password for the login gate (default: env var or built-in)
        """
        self.client = client if client is not None else AsyncGuvohnomaClient()
        self.session = session if session is not None else SessionContext()
        self.gate = LoginGate(self.session, login=login, password=password)
        self.tokens = RequestTokens()

    async def __aenter__(self):
        await self.client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.__aexit__(exc_type, exc_val, exc_tb)

    async def open_page(
        self,
        page: Page,
        notifier: Notifier | None = None,
        viewport_width: int | None = None,
    ) -> PageControllers:
        """Initialize a freshly loaded page.

        Initialization is chosen by the containers the page contains: the
        dashboard counters, the certificate table and forms, the student
        table and forms, and the login button. The sidebar preference is
        restored on every page.

        Args:
            page: Loaded page
            notifier: Notification component (default: PageNotifier for the page)
            viewport_width: Current viewport width in pixels, if known

        Returns:
            The controllers attached to the page
        """
        notifier = notifier if notifier is not None else PageNotifier(page)
        sidebar = SidebarController(page, self.session)
        controllers = PageControllers(page, notifier, sidebar)

        if sidebar.available:
            sidebar.restore(viewport_width)
            page.bind(TOGGLE_BUTTON_CLASS, "click", sidebar.toggle)

        if page.has_element(LOGIN_BUTTON_ID):
            controllers.login = self.gate
            if self.gate.redirect_if_authenticated(page):
                return controllers
            page.bind(LOGIN_BUTTON_ID, "click", lambda: self.gate.submit(page))

        if page.has_element(DASHBOARD_MARKER_ID):
            controllers.dashboard = DashboardLoader(self.client, page, notifier, self.tokens)
            await controllers.dashboard.load_dashboard()

        if any(
            page.has_element(element_id)
            for element_id in (
                documents_page.TABLE_BODY_ID,
                documents_page.ADD_FORM_ID,
                documents_page.EDIT_FORM_ID,
            )
        ):
            documents = DocumentsController(self.client, page, notifier, self.tokens)
            controllers.documents = documents

            if page.has_element(documents_page.TABLE_BODY_ID):
                await documents.load_documents()
            if page.has_element(documents_page.ADD_FORM_ID):
                page.bind(documents_page.ADD_FORM_ID, "submit", documents.add_document)
            if page.has_element(documents_page.EDIT_FORM_ID):
                await documents.setup_edit_page()

        if any(
            page.has_element(element_id)
            for element_id in (
                students_page.TABLE_BODY_ID,
                students_page.ADD_FORM_ID,
                students_page.EDIT_FORM_ID,
            )
        ):
            students = StudentsController(self.client, page, notifier, self.tokens)
            controllers.students = students

            if page.has_element(students_page.TABLE_BODY_ID):
                await students.load_students()
            if page.has_element(students_page.ADD_FORM_ID):
                page.bind(students_page.ADD_FORM_ID, "submit", students.add_student)
            if page.has_element(students_page.EDIT_FORM_ID):
                await students.setup_edit_page()

        logger.debug(f"Initialized page {page.path or '<unnamed>'}")
        return controllers
