"""Page controllers for the admin panel."""

from .base import BaseController, RequestTokens, busy_button
from .dashboard import DashboardLoader
from .documents import DocumentsController
from .layout import SidebarController
from .students import StudentsController

__all__ = [
    "BaseController",
    "RequestTokens",
    "busy_button",
    "DashboardLoader",
    "DocumentsController",
    "StudentsController",
    "SidebarController",
]
