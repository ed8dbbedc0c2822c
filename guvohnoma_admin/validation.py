"""Client-side validation of certificate and student forms.

Every check raises ValidationError with the message shown to the user and
stops at the first failing rule.
"""

import re
from datetime import date

from .exceptions import ValidationError
from .models import Category, Student, StudentUpdate
from .notifications import Level, Notifier
from .utils import parse_date

JSHSHIR_PATTERN = re.compile(r"[0-9]{14}")

# Certificate form messages
DOCUMENT_JSHSHIR_MESSAGE = "JShShIR 14 raqamdan iborat bo'lishi kerak!"
STUDENT_NAME_REQUIRED_MESSAGE = "Talaba ismini kiriting!"
COMMISSION_REQUIRED_MESSAGE = "Imtihon komissiyasi raqamini kiriting!"
CATEGORY_REQUIRED_MESSAGE = "Kamida bitta toifani tanlang!"
GRADES_REQUIRED_MESSAGE = "Barcha baholarni tanlang!"

# Student form messages
STUDENT_JSHSHIR_MESSAGE = "JShShIR 14 ta raqamdan iborat bo'lishi kerak"
FULL_NAME_MESSAGE = "To'liq ism kamida 3 belgidan iborat bo'lishi kerak"
BIRTH_DATE_REQUIRED_MESSAGE = "Tug'ilgan sana kiritilishi shart"
BIRTH_DATE_FUTURE_MESSAGE = "Tug'ilgan sana kelajakda bo'lishi mumkin emas"

MIN_FULL_NAME_LENGTH = 3


def is_valid_jshshir(value: str | None) -> bool:
    """Check that a JShShIR is exactly 14 digits."""
    return bool(value) and JSHSHIR_PATTERN.fullmatch(value) is not None


def check_jshshir(value: str | None, message: str = STUDENT_JSHSHIR_MESSAGE) -> None:
    """Raise ValidationError unless the value is exactly 14 digits."""
    if not is_valid_jshshir(value):
        raise ValidationError(message, field="jshshir")


def check_document_fields(
    jshshir: str,
    student_name: str,
    commission_number: str,
    categories: list[Category],
    grade1: str | None,
    grade2: str | None,
) -> None:
    """Validate the certificate form in display order.

    Raises:
        ValidationError: On the first failing rule
    """
    check_jshshir(jshshir, DOCUMENT_JSHSHIR_MESSAGE)

    if not student_name:
        raise ValidationError(STUDENT_NAME_REQUIRED_MESSAGE, field="student_name")

    if not commission_number:
        raise ValidationError(COMMISSION_REQUIRED_MESSAGE, field="commission_number")

    if not categories:
        raise ValidationError(CATEGORY_REQUIRED_MESSAGE, field="categories")

    if not grade1 or not grade2:
        raise ValidationError(GRADES_REQUIRED_MESSAGE, field="grades")


def _check_name_and_birth_date(full_name: str, birth_date: str, today: date | None) -> None:
    if not full_name or len(full_name.strip()) < MIN_FULL_NAME_LENGTH:
        raise ValidationError(FULL_NAME_MESSAGE, field="full_name")

    if not birth_date:
        raise ValidationError(BIRTH_DATE_REQUIRED_MESSAGE, field="birth_date")

    born = parse_date(birth_date)
    if born is not None and born > (today or date.today()):
        raise ValidationError(BIRTH_DATE_FUTURE_MESSAGE, field="birth_date")


def check_student(student: Student, today: date | None = None) -> None:
    """Validate a full student record.

    Raises:
        ValidationError: On the first failing rule
    """
    check_jshshir(student.jshshir)
    _check_name_and_birth_date(student.full_name, student.birth_date, today)


def check_student_update(update: StudentUpdate, today: date | None = None) -> None:
    """Validate the editable fields of a student."""
    _check_name_and_birth_date(update.full_name, update.birth_date, today)


def validate_student(
    student: Student | StudentUpdate,
    notifier: Notifier,
    today: date | None = None,
) -> bool:
    """Validate a student and report the first problem to the user.

    Args:
        student: Full record or update payload
        notifier: Where to report a failing rule
        today: Reference date for the birth date check (default: today)

    Returns:
        True if every rule passed
    """
    try:
        if isinstance(student, Student):
            check_student(student, today)
        else:
            check_student_update(student, today)
    except ValidationError as e:
        notifier.notify(e.message, Level.ERROR)
        return False
    return True
