"""Common Pydantic models shared across admin panel resources."""

from pydantic import BaseModel


class Dashboard(BaseModel):
    """Aggregate counters shown on the main page."""

    users: int = 0
    students: int = 0
    documents: int = 0

    model_config = {"frozen": True}


class OperationResult(BaseModel):
    """Acknowledgement returned by the API for write operations."""

    status: str = ""
    message: str = ""
    success: bool | None = None
    id: int | None = None
    certificate_number: str | None = None
    commission_number: str | None = None
    invoice_number: str | None = None
    rows_affected: int | None = None

    model_config = {"frozen": True, "extra": "allow"}
