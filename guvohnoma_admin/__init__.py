"""Guvohnoma Admin - Python client and page controllers for the tractor-driver certificate panel."""

__version__ = "0.1.0"

# Authentication
from .auth import FileStorage, LoginGate, MemoryStorage, NullStorage, SessionContext, StorageBackend

# Main clients
from .client import AsyncGuvohnomaClient, GuvohnomaClient

# Controllers
from .controllers import (
    DashboardLoader,
    DocumentsController,
    RequestTokens,
    SidebarController,
    StudentsController,
)

# Exceptions
from .exceptions import (
    APIError,
    AuthenticationError,
    GuvohnomaAdminError,
    NetworkError,
    NotFoundError,
    ParseError,
    ValidationError,
)

# Models
from .models import (
    Category,
    Dashboard,
    Document,
    DocumentCounts,
    DocumentDetail,
    DocumentInput,
    DocumentStatus,
    Invoice,
    InvoiceInput,
    InvoiceStatus,
    OperationResult,
    Student,
    StudentUpdate,
)
from .notifications import Level, LoggingNotifier, Notice, Notifier, PageNotifier
from .page import Navigation, Page
from .panel import AdminPanel, PageControllers
from .qr import qr_svg, verification_url

# Utilities
from .utils import (
    DEFAULT_HEADERS,
    PAGES,
    PUBLIC_URL,
    build_url,
    display_certificate_number,
    format_date,
    format_date_for_input,
    format_phone_for_api,
    format_phone_for_display,
    parse_date,
    parse_html,
)
from .validation import is_valid_jshshir, validate_student

__all__ = [
    # Version
    "__version__",
    # Main clients
    "GuvohnomaClient",
    "AsyncGuvohnomaClient",
    "AdminPanel",
    "PageControllers",
    # Pages and controllers
    "Page",
    "Navigation",
    "DashboardLoader",
    "DocumentsController",
    "StudentsController",
    "SidebarController",
    "RequestTokens",
    # Notifications
    "Level",
    "Notice",
    "Notifier",
    "LoggingNotifier",
    "PageNotifier",
    # Authentication
    "LoginGate",
    "SessionContext",
    "StorageBackend",
    "NullStorage",
    "MemoryStorage",
    "FileStorage",
    # Models
    "Dashboard",
    "OperationResult",
    "Category",
    "DocumentStatus",
    "Document",
    "DocumentDetail",
    "DocumentInput",
    "DocumentCounts",
    "Student",
    "StudentUpdate",
    "InvoiceStatus",
    "Invoice",
    "InvoiceInput",
    # Exceptions
    "GuvohnomaAdminError",
    "AuthenticationError",
    "NetworkError",
    "APIError",
    "NotFoundError",
    "ParseError",
    "ValidationError",
    # Utilities
    "parse_html",
    "parse_date",
    "build_url",
    "format_date",
    "format_date_for_input",
    "format_phone_for_display",
    "format_phone_for_api",
    "display_certificate_number",
    "is_valid_jshshir",
    "validate_student",
    "verification_url",
    "qr_svg",
    "DEFAULT_HEADERS",
    "PAGES",
    "PUBLIC_URL",
]
