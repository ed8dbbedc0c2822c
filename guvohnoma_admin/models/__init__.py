"""Pydantic models for the admin panel API.

This module exports all models from the resource-specific submodules.
You can import from specific modules:
    from guvohnoma_admin.models.documents import Document, Category
    from guvohnoma_admin.models.students import Student

Or from the main models module:
    from guvohnoma_admin.models import Document, Student, Invoice
"""

# Common models
from .common import Dashboard, OperationResult

# Document models
from .documents import (
    Category,
    Document,
    DocumentCounts,
    DocumentDetail,
    DocumentInput,
    DocumentStatus,
    join_categories,
    parse_categories,
)

# Invoice models
from .invoices import Invoice, InvoiceInput, InvoiceStatus

# Student models
from .students import Student, StudentUpdate

__all__ = [
    # Common models
    "Dashboard",
    "OperationResult",
    # Document models
    "Category",
    "DocumentStatus",
    "Document",
    "DocumentDetail",
    "DocumentInput",
    "DocumentCounts",
    "parse_categories",
    "join_categories",
    # Student models
    "Student",
    "StudentUpdate",
    # Invoice models
    "InvoiceStatus",
    "Invoice",
    "InvoiceInput",
]
