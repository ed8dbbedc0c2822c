"""Sidebar layout shared by every panel page."""

import logging

from ..auth import SessionContext
from ..page import Page, add_class, has_class, remove_class

logger = logging.getLogger(__name__)

BODY_CLASS = "toggle-sidebar"
SIDEBAR_ID = "sidebar"
SIDEBAR_CLASS = "collapsed"
TOGGLE_BUTTON_CLASS = "toggle-sidebar-btn"

# Viewports this narrow always show a collapsed sidebar
NARROW_VIEWPORT = 768


class SidebarController:
    """Collapse and expand the sidebar, remembering the choice in the session."""

    def __init__(self, page: Page, session: SessionContext):
        self.page = page
        self.session = session

    @property
    def available(self) -> bool:
        """Check if the page has both the sidebar and its toggle button."""
        return self.page.has_element(SIDEBAR_ID) and self.toggle_button is not None

    @property
    def toggle_button(self):
        return self.page.soup.find(class_=TOGGLE_BUTTON_CLASS)

    @property
    def collapsed(self) -> bool:
        return has_class(self.page.body, BODY_CLASS)

    def _apply(self, collapsed: bool) -> None:
        sidebar = self.page.element(SIDEBAR_ID)
        if collapsed:
            add_class(self.page.body, BODY_CLASS)
            add_class(sidebar, SIDEBAR_CLASS)
        else:
            remove_class(self.page.body, BODY_CLASS)
            remove_class(sidebar, SIDEBAR_CLASS)

    def toggle(self) -> bool:
        """Flip the sidebar state and save it.

        Returns:
            True if the sidebar is now collapsed
        """
        if not self.available:
            return False

        collapsed = not self.collapsed
        self._apply(collapsed)
        self.session.set_sidebar_collapsed(collapsed)
        logger.debug(f"Sidebar collapsed: {collapsed}")
        return collapsed

    def restore(self, viewport_width: int | None = None) -> bool:
        """Apply the saved preference, collapsing on narrow viewports.

        Args:
            viewport_width: Current viewport width in pixels, if known

        Returns:
            True if the sidebar is collapsed afterwards
        """
        if not self.available:
            return False

        if viewport_width is not None and viewport_width <= NARROW_VIEWPORT:
            self._apply(True)
            return True

        collapsed = self.session.sidebar_collapsed
        self._apply(collapsed)
        return collapsed
