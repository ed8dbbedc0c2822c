"""Explicit session context for the admin panel."""

import logging

from .storage import MemoryStorage, StorageBackend

logger = logging.getLogger(__name__)

AUTH_KEY = "isAuth"
SIDEBAR_KEY = "sidebarCollapsed"


class SessionContext:
    """Per-user panel state: the login flag and the sidebar preference.

    Values are kept as ``"true"``/``"false"`` strings in the storage backend
    so a file-backed session stays compatible with the browser keys.
    """

    def __init__(self, storage: StorageBackend | None = None):
        """Initialize session context.

        Args:
            storage: Storage backend (default: MemoryStorage)
        """
        self.storage = storage if storage is not None else MemoryStorage()

    @property
    def is_authenticated(self) -> bool:
        """Check if the login gate has been passed."""
        return self.storage.get(AUTH_KEY) == "true"

    def mark_authenticated(self) -> None:
        """Record a successful login."""
        self.storage.set(AUTH_KEY, "true")
        logger.debug("Session marked as authenticated")

    def logout(self) -> None:
        """Forget the login flag."""
        self.storage.delete(AUTH_KEY)
        logger.debug("Session logged out")

    @property
    def sidebar_collapsed(self) -> bool:
        """Get the saved sidebar preference."""
        return self.storage.get(SIDEBAR_KEY) == "true"

    def set_sidebar_collapsed(self, collapsed: bool) -> None:
        """Save the sidebar preference."""
        self.storage.set(SIDEBAR_KEY, "true" if collapsed else "false")
