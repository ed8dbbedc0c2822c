"""Pydantic models for driver certificate (guvohnoma) documents."""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator

from ..utils import display_certificate_number, parse_date

DEFAULT_TITLE = "Traktor haydovchisi guvohnomasi"
DEFAULT_DIRECTOR = "N. ILYASOVA"
DEFAULT_COURSE_HOURS = 120


class Category(str, Enum):
    """Tractor driver licence category."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"


class DocumentStatus(str, Enum):
    """Lifecycle status of a certificate."""

    ACTIVE = "active"


def parse_categories(value: Any) -> tuple[Category, ...]:
    """Parse the comma-joined wire representation of categories.

    Raises:
        ValueError: If a category code is unknown
    """
    if value is None or value == "":
        return ()
    if isinstance(value, str):
        value = value.split(",")
    return tuple(
        code if isinstance(code, Category) else Category(str(code).strip())
        for code in value
        if isinstance(code, Category) or str(code).strip()
    )


def join_categories(categories) -> str:
    """Serialize categories to the comma-joined wire form (``"B,C"``)."""
    return ",".join(Category(c).value for c in categories)


class _CertificateFields(BaseModel):
    """Fields shared by stored documents and create/update payloads."""

    categories: tuple[Category, ...] = ()
    status: DocumentStatus | None = None

    @field_validator("categories", mode="before")
    @classmethod
    def _parse_categories(cls, value):
        return parse_categories(value)

    @field_validator("status", mode="before")
    @classmethod
    def _empty_status(cls, value):
        return value or None

    @field_serializer("categories")
    def _serialize_categories(self, categories: tuple[Category, ...]) -> str:
        return join_categories(categories)

    @field_serializer("status")
    def _serialize_status(self, status: DocumentStatus | None) -> str:
        return status.value if status else ""


class Document(_CertificateFields):
    """Certificate record as returned by the API."""

    id: int
    title: str = ""
    student_jshshir: str = ""
    student_name: str = ""
    course_start: str = ""
    course_end: str = ""
    exam_date: str = ""
    course_hours: int = 0
    grade1: int = 0
    grade2: int = 0
    certificate_number: str = ""
    commission_number: str = ""
    director_name: str = ""
    created_at: str = ""

    model_config = {"frozen": True}

    @property
    def display_number(self) -> str:
        """Short certificate number shown in the list badge."""
        return display_certificate_number(self.certificate_number, self.id)

    @property
    def exam_day(self) -> date | None:
        """Parsed exam date, if any."""
        return parse_date(self.exam_date)


class DocumentDetail(Document):
    """Certificate joined with student data and a server-rendered QR code."""

    student_birth_date: str = ""
    student_phone: str = ""
    qr_code_base64: str = ""


class DocumentInput(_CertificateFields):
    """Payload for creating or updating a certificate."""

    title: str = DEFAULT_TITLE
    student_jshshir: str
    student_name: str
    course_start: str = ""
    course_end: str = ""
    exam_date: str = ""
    course_hours: int = DEFAULT_COURSE_HOURS
    grade1: int
    grade2: int
    certificate_number: str = ""
    status: DocumentStatus | None = DocumentStatus.ACTIVE
    commission_number: str
    director_name: str = DEFAULT_DIRECTOR

    def to_payload(self) -> dict:
        """Get the JSON request body."""
        return self.model_dump(mode="json")


class DocumentCounts(BaseModel):
    """Summary counters shown above the certificate list."""

    total: int = 0
    this_month: int = 0
    with_certificate: int = 0
    printed_today: int = Field(default=0, description="Not tracked yet, always 0")

    model_config = {"frozen": True}

    @classmethod
    def from_documents(cls, documents: list[Document], today: date | None = None) -> "DocumentCounts":
        """Compute the counters for a list of documents.

        Args:
            documents: Documents currently listed
            today: Reference date for the "this month" counter (default: today)

        Returns:
            DocumentCounts instance
        """
        today = today or date.today()

        this_month = 0
        for document in documents:
            exam_day = document.exam_day
            if exam_day and exam_day.month == today.month and exam_day.year == today.year:
                this_month += 1

        return cls(
            total=len(documents),
            this_month=this_month,
            with_certificate=len([d for d in documents if d.certificate_number]),
        )
