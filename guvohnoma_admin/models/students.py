"""Pydantic models for student records."""

from pydantic import BaseModel

from ..utils import format_phone_for_display


class Student(BaseModel):
    """Student record keyed by JShShIR."""

    jshshir: str
    full_name: str = ""
    birth_date: str = ""
    phone: str | None = ""

    model_config = {"frozen": True}

    @property
    def display_phone(self) -> str:
        """Phone number grouped for display."""
        return format_phone_for_display(self.phone)


class StudentUpdate(BaseModel):
    """Payload for updating a student (the key travels in the URL)."""

    full_name: str
    birth_date: str
    phone: str | None = None
