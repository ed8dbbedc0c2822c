"""Utility functions for guvohnoma-admin package."""

import json
import re
from datetime import date, datetime
from urllib.parse import urlencode

from bs4 import BeautifulSoup

from .exceptions import ParseError

# Common headers for API requests
DEFAULT_HEADERS = {
    "User-Agent": "guvohnoma-admin/0.1.0",
    "Accept": "application/json",
}

DEFAULT_BASE_URL = "http://localhost:8080"

# Public address encoded into certificate verification QR codes
PUBLIC_URL = "https://traktor-production.up.railway.app/"

# Admin panel pages
PAGES = {
    "index": "index.html",
    "login": "login.html",
    "documents_list": "Guvohnomalar-list.html",
    "documents_add": "Guvohnomalar-add.html",
    "documents_edit": "Guvohnomalar-edit.html",
    "certificate": "certificate.html",
    "verify": "verify.html",
    "students_list": "students-list.html",
    "students_edit": "students-edit.html",
    "students_view": "students-view.html",
}

_CERTIFICATE_PREFIX = "GUV-"
_UZ_COUNTRY_CODE = "998"


def parse_html(html: str, parser: str = "lxml") -> BeautifulSoup:
    """Parse HTML content with BeautifulSoup.

    Args:
        html: HTML content as string
        parser: Parser to use (default: lxml)

    Returns:
        BeautifulSoup object

    Raises:
        ParseError: If parsing fails
    """
    try:
        return BeautifulSoup(html, parser)
    except Exception as e:
        raise ParseError(f"Failed to parse HTML: {e}") from e


def build_url(base: str, *parts, **params) -> str:
    """Build URL with path parts and query parameters.

    Args:
        base: Base URL
        *parts: URL path parts
        **params: Query parameters

    Returns:
        Complete URL
    """
    url = base.rstrip("/")
    if parts:
        url += "/" + "/".join(str(p).strip("/") for p in parts)

    query = urlencode({k: v for k, v in params.items() if v is not None})
    if query:
        url += "?" + query

    return url


def page_url(name: str, **params) -> str:
    """Build a relative admin panel page URL (e.g. ``students-edit.html?jshshir=...``)."""
    url = PAGES[name]
    query = urlencode({k: v for k, v in params.items() if v is not None})
    if query:
        url += "?" + query
    return url


def parse_date(value: str | date | None) -> date | None:
    """Parse an API date string.

    Accepts plain ``YYYY-MM-DD`` values as well as full ISO timestamps
    (``2024-01-15T00:00:00Z``).

    Args:
        value: Date string, date object or None

    Returns:
        date object, or None if the value is empty or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    value = value.strip()
    if not value:
        return None

    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        pass

    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def format_date(value: str | date | None) -> str:
    """Format a date for table display as ``DD.MM.YYYY``.

    Empty values render as an em dash; unparseable values are returned as is.
    """
    if not value:
        return "—"
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return parsed.strftime("%d.%m.%Y")


def format_date_for_input(value: str | date | None) -> str:
    """Format a date for a date form input (``YYYY-MM-DD``).

    Args:
        value: Date string or date object

    Returns:
        ISO date string, empty string for empty input, or the input unchanged
        when it cannot be parsed
    """
    if not value:
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return parsed.isoformat()


def format_phone_for_display(phone: str | None) -> str:
    """Format a stored phone number as ``XX XXX-XX-XX``.

    Args:
        phone: Phone number, usually ``+998XXXXXXXXX``

    Returns:
        Grouped national number, or the input unchanged if it is not a
        9-digit national number
    """
    if not phone:
        return ""

    national = re.sub(r"^\+998", "", phone)
    national = re.sub(r"\D", "", national)

    if len(national) == 9:
        return f"{national[:2]} {national[2:5]}-{national[5:7]}-{national[7:]}"

    return phone


def format_phone_for_api(phone: str | None) -> str | None:
    """Normalize a phone input to ``+998XXXXXXXXX``.

    Nine local digits get the country prefix, twelve digits starting with
    998 get a plus sign. Any other shape is passed through unchanged; this
    is not a validator.

    Args:
        phone: Raw phone input

    Returns:
        Normalized phone, the unchanged input, or None for blank input
    """
    if not phone or not phone.strip():
        return None

    digits = re.sub(r"\D", "", phone)

    if len(digits) == 9:
        return f"+{_UZ_COUNTRY_CODE}{digits}"

    if len(digits) == 12 and digits.startswith(_UZ_COUNTRY_CODE):
        return f"+{digits}"

    return phone


def display_certificate_number(certificate_number: str | None, document_id: int | None = None) -> str:
    """Derive the short certificate number shown in the table badge.

    ``GUV-2024-015`` becomes ``015``, a bare number stays as is, and an empty
    number falls back to the document id padded to six digits.

    Args:
        certificate_number: Certificate number as stored
        document_id: Server-assigned document id

    Returns:
        Display number (may be empty if neither is available)
    """
    number = certificate_number or ""

    if number.startswith(_CERTIFICATE_PREFIX):
        number = number[len(_CERTIFICATE_PREFIX):]

    if "-" in number:
        number = number.split("-")[-1]

    if not number and document_id:
        number = str(document_id).zfill(6)

    return number


def extract_error_message(body: str, status_code: int) -> str:
    """Extract a human readable error message from an error response body.

    JSON bodies are searched for ``message`` and then ``error``; anything else
    falls back to the raw text and finally to ``HTTP <status>``.

    Args:
        body: Raw response text
        status_code: HTTP status code

    Returns:
        Error message
    """
    body = body.strip()
    try:
        data = json.loads(body)
    except ValueError:
        return body or f"HTTP {status_code}"

    if isinstance(data, dict):
        message = data.get("message") or data.get("error")
        if message:
            return str(message)

    return body or f"HTTP {status_code}"
