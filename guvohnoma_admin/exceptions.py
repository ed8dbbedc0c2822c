"""Custom exceptions for guvohnoma-admin package."""


class GuvohnomaAdminError(Exception):
    """Base exception for all guvohnoma-admin errors."""

    pass


class AuthenticationError(GuvohnomaAdminError):
    """Raised when the login gate rejects the submitted credentials."""

    pass


class NetworkError(GuvohnomaAdminError):
    """Raised when a request fails before any response arrives."""

    pass


class APIError(GuvohnomaAdminError):
    """Raised when the API answers with a non-OK status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(APIError):
    """Raised when the requested resource does not exist."""

    pass


class ParseError(GuvohnomaAdminError):
    """Raised when a response body cannot be decoded into a model."""

    pass


class ValidationError(GuvohnomaAdminError):
    """Raised when form data fails client-side validation."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field
