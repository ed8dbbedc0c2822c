"""Login gate for the admin panel.

This is a UI convenience only: the credential pair lives in client code and
the API does not check anything. Real authentication has to be enforced on
the server.
"""

import logging
import os

from ..exceptions import AuthenticationError
from ..page import Page
from ..utils import PAGES
from .session import SessionContext

logger = logging.getLogger(__name__)

DEFAULT_LOGIN = "Anvar"
DEFAULT_PASSWORD = "1727"

LOGIN_ERROR_MESSAGE = "Login yoki parol noto‘g‘ri"


class LoginGate:
    """Compare submitted credentials against a fixed pair."""

    def __init__(
        self,
        session: SessionContext,
        login: str | None = None,
        password: str | None = None,
    ):
        """Initialize login gate.

        Args:
            session: Session context receiving the login flag
            login: Expected login (default: GUVOHNOMA_ADMIN_LOGIN env var or "Anvar")
            password: Expected password (default: GUVOHNOMA_ADMIN_PASSWORD env var or "1727")
        """
        self.session = session
        self.login_name = login or os.environ.get("GUVOHNOMA_ADMIN_LOGIN") or DEFAULT_LOGIN
        self.password = password or os.environ.get("GUVOHNOMA_ADMIN_PASSWORD") or DEFAULT_PASSWORD

    def login(self, login: str, password: str) -> None:
        """Check credentials and mark the session as authenticated.

        Raises:
            AuthenticationError: If the pair does not match
        """
        if login != self.login_name or password != self.password:
            logger.warning(f"Rejected login attempt for {login!r}")
            raise AuthenticationError(LOGIN_ERROR_MESSAGE)

        self.session.mark_authenticated()
        logger.info(f"User {login!r} logged in")

    def redirect_if_authenticated(self, page: Page) -> bool:
        """Send an already logged-in user from the login page to the main page.

        Returns:
            True if a redirect was issued
        """
        if not self.session.is_authenticated:
            return False
        page.navigate(PAGES["index"])
        return True

    def submit(self, page: Page) -> bool:
        """Handle a click on the login button of the login page.

        Returns:
            True if the login succeeded
        """
        try:
            self.login(page.value("login"), page.value("password"))
        except AuthenticationError as e:
            page.set_text("error", str(e))
            return False

        page.navigate(PAGES["index"])
        return True
