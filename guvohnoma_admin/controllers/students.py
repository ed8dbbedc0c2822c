"""Controller for the student list, add and edit pages."""

import logging
from datetime import date

from ..exceptions import GuvohnomaAdminError, NotFoundError
from ..models import OperationResult, Student, StudentUpdate
from ..notifications import Level
from ..rendering import student_rows, students_error_row, students_loading_row
from ..utils import format_date_for_input, format_phone_for_api, format_phone_for_display, page_url
from ..validation import validate_student
from .base import LOADING_LABEL, SAVING_LABEL, BaseController, busy_button

logger = logging.getLogger(__name__)

VIEW = "students"

TABLE_BODY_ID = "students-table-body"
ADD_FORM_ID = "addStudentForm"
EDIT_FORM_ID = "editStudentForm"

MISSING_KEY_REDIRECT_DELAY = 2.0
LOAD_FAILURE_REDIRECT_DELAY = 3.0
UPDATE_REDIRECT_DELAY = 1.5


class StudentsController(BaseController):
    """List, create, edit and delete students on a panel page."""

    def __init__(self, *args, today: date | None = None, **kwargs):
        """Initialize controller.

        Args:
            today: Reference date for birth date validation (default: today)
        """
        super().__init__(*args, **kwargs)
        self.today = today

    def validate_student(self, student: Student | StudentUpdate) -> bool:
        """Validate a student and notify about the first failing rule."""
        return validate_student(student, self.notifier, self.today)

    # List page

    async def load_students(self) -> list[Student] | None:
        """Fetch all students and render the table.

        A loading row is shown until the response arrives. Responses of a
        superseded load are discarded.

        Returns:
            The rendered students, or None if the load failed or was superseded
        """
        if not self.page.has_element(TABLE_BODY_ID):
            return None

        token = self.tokens.issue(VIEW)
        self.page.replace_children(TABLE_BODY_ID, [students_loading_row()])

        try:
            students = await self.client.get_students()
        except GuvohnomaAdminError as e:
            if not self.tokens.is_current(VIEW, token):
                logger.warning(f"Ignoring failure of superseded students load: {e}")
                return None
            logger.error(f"Load students error: {e}")
            self.page.replace_children(TABLE_BODY_ID, [students_error_row()])
            return None

        if not self.tokens.is_current(VIEW, token):
            logger.warning(f"Discarding superseded students response (token {token})")
            return None

        self.page.replace_children(TABLE_BODY_ID, student_rows(students))
        self.page.set_text("totalStudents", len(students))
        return students

    async def delete_student(self, jshshir: str) -> bool:
        """Delete a student after confirmation and reload the list.

        Returns:
            True if the student was deleted
        """
        if not self.page.confirm(f"Rostan ham JShShIR: {jshshir} bo'lgan o'quvchini o'chirmoqchimisiz?"):
            return False

        try:
            await self.client.delete_student(jshshir)
        except GuvohnomaAdminError as e:
            logger.error(f"Delete student {jshshir} error: {e}")
            self.notifier.notify(f"O'chirishda xatolik: {e}", Level.ERROR)
            return False

        self.notifier.notify("O'quvchi muvaffaqiyatli o'chirildi", Level.SUCCESS)
        await self.load_students()
        return True

    # Add page

    def read_add_form(self) -> Student:
        page = self.page
        return Student(
            jshshir=page.value("jshshir").strip(),
            full_name=page.value("fullName").strip(),
            birth_date=page.value("birthDate"),
            phone=format_phone_for_api(page.value("phone")),
        )

    async def add_student(self) -> OperationResult | None:
        """Handle submission of the add form."""
        student = self.read_add_form()
        if not self.validate_student(student):
            return None

        with busy_button(self.page.submit_button(ADD_FORM_ID), SAVING_LABEL):
            try:
                result = await self.client.create_student(student)
            except GuvohnomaAdminError as e:
                logger.error(f"Add student error: {e}")
                self.notifier.notify(f"Saqlashda xatolik: {e}", Level.ERROR)
                return None

        self.notifier.notify("O'quvchi muvaffaqiyatli qo'shildi!", Level.SUCCESS)
        self.page.navigate(page_url("students_list"), delay=UPDATE_REDIRECT_DELAY)
        return result

    # Edit page

    async def setup_edit_page(self) -> Student | None:
        """Load the student named in the query string into the edit form."""
        jshshir = self.page.query_param("jshshir")

        if not jshshir:
            self.notifier.notify("JShShIR parametri topilmadi!", Level.ERROR)
            self.page.navigate(page_url("students_list"), delay=MISSING_KEY_REDIRECT_DELAY)
            return None

        student = await self.load_student_for_edit(jshshir)
        if student is not None:
            self.page.bind(EDIT_FORM_ID, "submit", lambda: self.update_student(jshshir))
        return student

    async def load_student_for_edit(self, jshshir: str) -> Student | None:
        """Fetch a student and populate the edit form."""
        self.page.set_text("editJshshirDisplay", jshshir)

        with busy_button(self.page.submit_button(EDIT_FORM_ID), LOADING_LABEL):
            try:
                student = await self.client.get_student(jshshir)
            except NotFoundError:
                error = "Talaba topilmadi"
            except GuvohnomaAdminError as e:
                logger.error(f"Load student {jshshir} error: {e}")
                error = "Server xatosi"
            else:
                error = None

        if error:
            self.notifier.notify(f"Talaba yuklanmadi: {error}", Level.ERROR)
            self.page.navigate(page_url("students_list"), delay=LOAD_FAILURE_REDIRECT_DELAY)
            return None

        self.page.set_value("editFullName", student.full_name)
        self.page.set_value("editBirthDate", format_date_for_input(student.birth_date))
        self.page.set_value("editPhone", format_phone_for_display(student.phone))

        logger.debug(f"Loaded student {jshshir} for editing")
        return student

    async def update_student(self, jshshir: str) -> OperationResult | None:
        """Handle submission of the edit form."""
        update = StudentUpdate(
            full_name=self.page.value("editFullName").strip(),
            birth_date=self.page.value("editBirthDate"),
            phone=format_phone_for_api(self.page.value("editPhone")),
        )
        if not self.validate_student(update):
            return None

        with busy_button(self.page.submit_button(EDIT_FORM_ID), SAVING_LABEL):
            try:
                result = await self.client.update_student(jshshir, update)
            except GuvohnomaAdminError as e:
                logger.error(f"Update student {jshshir} error: {e}")
                self.notifier.notify(f"Yangilashda xatolik: {e}", Level.ERROR)
                return None

        self.notifier.notify("Talaba ma'lumotlari muvaffaqiyatli yangilandi!", Level.SUCCESS)
        self.page.navigate(page_url("students_list"), delay=UPDATE_REDIRECT_DELAY)
        return result
