"""Pydantic models for student invoices."""

from enum import Enum

from pydantic import BaseModel, Field


class InvoiceStatus(str, Enum):
    """Payment status of an invoice, as stored by the API."""

    PENDING = "To'lov kutilmoqda"
    PAID = "To'landi"
    CANCELLED = "Bekor qilindi"


class Invoice(BaseModel):
    """Invoice issued to a student."""

    id: int
    student_jshshir: str = ""
    student_name: str = ""
    description: str = ""
    amount: float = 0.0
    status: InvoiceStatus = InvoiceStatus.PENDING
    invoice_number: str = ""
    created_at: str = ""
    issue_date: str = ""
    due_date: str = ""
    payment_date: str = ""
    student_birth_date: str = ""
    student_phone: str = ""

    model_config = {"frozen": True}

    @property
    def is_paid(self) -> bool:
        """Check if the invoice has been paid."""
        return self.status == InvoiceStatus.PAID


class InvoiceInput(BaseModel):
    """Payload for creating an invoice."""

    student_jshshir: str
    description: str = ""
    amount: float = Field(gt=0)
