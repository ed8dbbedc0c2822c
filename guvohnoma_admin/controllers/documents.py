"""Controller for the certificate (guvohnoma) list, add and edit pages."""

import logging
import re
from datetime import date

from bs4 import Tag

from ..exceptions import GuvohnomaAdminError, NotFoundError, ValidationError
from ..models import (
    Category,
    Document,
    DocumentCounts,
    DocumentInput,
    DocumentStatus,
    OperationResult,
)
from ..models.documents import DEFAULT_COURSE_HOURS, DEFAULT_DIRECTOR, DEFAULT_TITLE
from ..notifications import Level
from ..page import Navigation
from ..qr import verification_url
from ..rendering import document_rows, qr_modal
from ..utils import PUBLIC_URL, format_date_for_input, page_url
from ..validation import GRADES_REQUIRED_MESSAGE, check_document_fields
from .base import LOADING_LABEL, SAVING_LABEL, BaseController, busy_button

logger = logging.getLogger(__name__)

VIEW = "documents"

TABLE_BODY_ID = "certificates-table-body"
ADD_FORM_ID = "addCertificateForm"
EDIT_FORM_ID = "editCertificateForm"
QR_MODAL_ID = "qrModal"

# Checkbox id -> category
CATEGORY_FIELDS = {
    "categoryA": Category.A,
    "categoryB": Category.B,
    "categoryC": Category.C,
    "categoryD": Category.D,
    "categoryE": Category.E,
    "categoryF": Category.F,
}

REDIRECT_DELAY = 2.0
LOAD_FAILURE_REDIRECT_DELAY = 3.0
PRINT_DELAY = 1.0

LEADING_INT_PATTERN = re.compile(r"\s*[-+]?[0-9]+")


def _parse_int(value: str, default: int) -> int:
    match = LEADING_INT_PATTERN.match(value)
    return (int(match.group()) if match else 0) or default


class DocumentsController(BaseController):
    """List, create, edit and delete certificates on a panel page."""

    public_url = PUBLIC_URL

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._editing: Document | None = None

    # List page

    async def load_documents(self) -> list[Document] | None:
        """Fetch all certificates and render them with the count widgets.

        On failure the previous table is left as it was. A response that
        arrives after a newer load has started is discarded.

        Returns:
            The rendered documents, or None if the load failed or was superseded
        """
        token = self.tokens.issue(VIEW)

        try:
            documents = await self.client.get_documents()
        except GuvohnomaAdminError as e:
            if not self.tokens.is_current(VIEW, token):
                logger.warning(f"Ignoring failure of superseded documents load: {e}")
                return None
            logger.error(f"Load documents error: {e}")
            self.notifier.notify(f"Guvohnomalarni yuklab bo'lmadi: {e}", Level.ERROR)
            return None

        if not self.tokens.is_current(VIEW, token):
            logger.warning(f"Discarding superseded documents response (token {token})")
            return None

        self.render_documents_table(documents)
        self.update_document_count(documents)
        return documents

    def render_documents_table(self, documents: list[Document]) -> bool:
        """Render the certificate table body.

        Returns:
            False if the page has no certificate table
        """
        return self.page.replace_children(TABLE_BODY_ID, document_rows(documents))

    def update_document_count(self, documents: list[Document], today: date | None = None) -> DocumentCounts:
        """Write the summary counters above the table."""
        counts = DocumentCounts.from_documents(documents, today)

        self.page.set_text("totalCertificates", counts.total)
        self.page.set_text("totalCount", counts.total)
        self.page.set_text("thisMonth", counts.this_month)
        self.page.set_text("withCertificate", counts.with_certificate)
        self.page.set_text("printedToday", counts.printed_today)

        return counts

    async def delete_certificate(self, document_id: int) -> bool:
        """Delete a certificate after confirmation and reload the list.

        Returns:
            True if the certificate was deleted
        """
        message = f"Rostdan ham guvohnoma #{document_id} ni o'chirmoqchimisiz?\nBu amalni bekor qilib bo'lmaydi!"
        if not self.page.confirm(message):
            return False

        try:
            await self.client.delete_document(document_id)
        except GuvohnomaAdminError as e:
            logger.error(f"Delete certificate error: {e}")
            self.notifier.notify(f"O'chirishda xatolik: {e}", Level.ERROR)
            return False

        self.notifier.notify("Guvohnoma muvaffaqiyatli o'chirildi!", Level.SUCCESS)
        await self.load_documents()
        return True

    def edit_certificate(self, document_id: int) -> Navigation:
        return self.page.navigate(page_url("documents_edit", id=document_id))

    def view_certificate(self, document_id: int) -> Navigation:
        return self.page.navigate(page_url("certificate", id=document_id))

    def print_certificate(self, document_id: int) -> None:
        """Announce printing and open the print dialog shortly after."""
        self.notifier.notify(
            f"Guvohnoma #{document_id} chop etish uchun tayyorlandi. Ctrl+P tugmalarini bosing.",
            Level.INFO,
        )
        self.page.request_print(PRINT_DELAY)

    async def handle_action(self, action: str, document_id: int):
        """Run the action of a table row button (``data-action``)."""
        if action == "edit":
            return self.edit_certificate(document_id)
        if action == "view":
            return self.view_certificate(document_id)
        if action == "print":
            return self.print_certificate(document_id)
        if action == "delete":
            return await self.delete_certificate(document_id)
        raise ValueError(f"Unknown document action: {action}")

    # QR code

    def show_qr(self, cert_number: str) -> Tag:
        """Open a modal with the verification QR code of a certificate."""
        self.page.remove(QR_MODAL_ID)
        url = verification_url(cert_number, self.public_url)
        logger.debug(f"QR code for {cert_number}: {url}")
        return self.page.append_to_body(qr_modal(cert_number, url, element_id=QR_MODAL_ID))

    def hide_qr(self) -> bool:
        """Close the QR modal and remove it from the page."""
        return self.page.remove(QR_MODAL_ID)

    # Add / edit form

    def read_form(self) -> DocumentInput:
        """Read and validate the certificate form.

        Raises:
            ValidationError: On the first failing rule
        """
        page = self.page

        jshshir = page.value("jshshir").strip()
        student_name = page.value("studentName").strip()
        commission_number = page.value("commissionNumber").strip()

        director_name = ""
        if page.has_element("directorName") and page.has_element("directorSurname"):
            director_name = f"{page.value('directorName').strip()} {page.value('directorSurname').strip()}".strip()

        categories = [category for field_id, category in CATEGORY_FIELDS.items() if page.is_checked(field_id)]

        grade1 = page.checked_value("grade1")
        grade2 = page.checked_value("grade2")

        check_document_fields(jshshir, student_name, commission_number, categories, grade1, grade2)

        try:
            grades = int(grade1), int(grade2)
        except ValueError as e:
            raise ValidationError(GRADES_REQUIRED_MESSAGE, field="grades") from e

        return DocumentInput(
            title=DEFAULT_TITLE,
            student_jshshir=jshshir,
            student_name=student_name,
            course_start=page.value("courseStartDate"),
            course_end=page.value("courseEndDate"),
            exam_date=page.value("examDate"),
            categories=tuple(categories),
            course_hours=_parse_int(page.value("courseHours").strip(), DEFAULT_COURSE_HOURS),
            grade1=grades[0],
            grade2=grades[1],
            certificate_number="",
            status=DocumentStatus.ACTIVE,
            commission_number=commission_number,
            director_name=director_name or DEFAULT_DIRECTOR,
        )

    def populate_form(self, document: Document) -> None:
        """Fill the certificate form with a stored document."""
        page = self.page

        page.set_value("jshshir", document.student_jshshir)
        page.set_value("studentName", document.student_name)
        page.set_value("commissionNumber", document.commission_number)

        first, _, rest = document.director_name.partition(" ")
        page.set_value("directorName", first)
        page.set_value("directorSurname", rest)

        page.set_value("courseStartDate", format_date_for_input(document.course_start))
        page.set_value("courseEndDate", format_date_for_input(document.course_end))
        page.set_value("examDate", format_date_for_input(document.exam_date))
        page.set_value("courseHours", document.course_hours or "")

        for field_id, category in CATEGORY_FIELDS.items():
            page.set_checked(field_id, category in document.categories)

        if document.grade1:
            page.check_radio("grade1", document.grade1)
        if document.grade2:
            page.check_radio("grade2", document.grade2)

    async def add_document(self) -> OperationResult | None:
        """Handle submission of the add form.

        Validation failures are reported without any request. On success the
        page returns to the list after a short delay.

        Returns:
            The API acknowledgement, or None if nothing was created
        """
        try:
            document = self.read_form()
        except ValidationError as e:
            self.notifier.notify(e.message, Level.ERROR)
            return None

        logger.debug(f"Sending document data: {document.to_payload()}")

        with busy_button(self.page.submit_button(ADD_FORM_ID), SAVING_LABEL):
            try:
                result = await self.client.create_document(document)
            except GuvohnomaAdminError as e:
                logger.error(f"Add document error: {e}")
                self.notifier.notify(f"Guvohnoma qo'shishda xatolik: {e}", Level.ERROR)
                return None

        self.notifier.notify("Guvohnoma muvaffaqiyatli qo'shildi!", Level.SUCCESS)
        self.page.navigate(page_url("documents_list"), delay=REDIRECT_DELAY)
        return result

    async def setup_edit_page(self) -> Document | None:
        """Load the certificate named in the query string into the edit form."""
        raw_id = self.page.query_param("id")

        if not raw_id or not raw_id.isdigit():
            self.notifier.notify("Guvohnoma ID parametri topilmadi!", Level.ERROR)
            self.page.navigate(page_url("documents_list"), delay=REDIRECT_DELAY)
            return None

        document_id = int(raw_id)
        document = await self.load_document_for_edit(document_id)
        if document is not None:
            self.page.bind(EDIT_FORM_ID, "submit", lambda: self.update_document(document_id))
        return document

    async def load_document_for_edit(self, document_id: int) -> Document | None:
        """Fetch a certificate and populate the edit form with it."""
        with busy_button(self.page.submit_button(EDIT_FORM_ID), LOADING_LABEL):
            try:
                document = await self.client.get_document(document_id)
            except NotFoundError:
                error = "Guvohnoma topilmadi"
            except GuvohnomaAdminError as e:
                logger.error(f"Load document {document_id} error: {e}")
                error = "Server xatosi"
            else:
                error = None

        if error:
            self.notifier.notify(f"Guvohnoma yuklanmadi: {error}", Level.ERROR)
            self.page.navigate(page_url("documents_list"), delay=LOAD_FAILURE_REDIRECT_DELAY)
            return None

        self._editing = document
        self.populate_form(document)
        logger.debug(f"Loaded document {document_id} for editing")
        return document

    async def update_document(self, document_id: int) -> OperationResult | None:
        """Handle submission of the edit form."""
        try:
            document = self.read_form()
        except ValidationError as e:
            self.notifier.notify(e.message, Level.ERROR)
            return None

        if self._editing is not None and self._editing.id == document_id:
            document = document.model_copy(
                update={
                    "title": self._editing.title or DEFAULT_TITLE,
                    "certificate_number": self._editing.certificate_number,
                    "status": self._editing.status or DocumentStatus.ACTIVE,
                }
            )

        with busy_button(self.page.submit_button(EDIT_FORM_ID), SAVING_LABEL):
            try:
                result = await self.client.update_document(document_id, document)
            except GuvohnomaAdminError as e:
                logger.error(f"Update document {document_id} error: {e}")
                self.notifier.notify(f"Yangilashda xatolik: {e}", Level.ERROR)
                return None

        self.notifier.notify("Guvohnoma muvaffaqiyatli yangilandi!", Level.SUCCESS)
        self.page.navigate(page_url("documents_list"), delay=REDIRECT_DELAY)
        return result
