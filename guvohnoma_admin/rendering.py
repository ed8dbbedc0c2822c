"""HTML fragments rendered into panel pages.

All builders return BeautifulSoup tags; text is escaped by the tree, so
values coming from the API never turn into markup.
"""

from bs4 import BeautifulSoup, Tag

from .models import Document, Student
from .qr import qr_svg
from .utils import format_date, format_date_for_input, page_url

DOCUMENT_COLUMNS = 8
STUDENT_COLUMNS = 6

_FACTORY = BeautifulSoup("", "html.parser")

_ALERT_STYLES = {
    "success": ("alert-success", "bi-check-circle"),
    "error": ("alert-danger", "bi-exclamation-triangle"),
    "info": ("alert-info", "bi-info-circle"),
}


def tag(name: str, *children, **attrs) -> Tag:
    """Build a tag.

    Keyword names map to attributes: a trailing underscore is dropped
    (``class_``) and inner underscores become dashes (``data_id``).
    None children and attributes are skipped.
    """
    attributes = {}
    for key, value in attrs.items():
        if value is None:
            continue
        attributes[key.rstrip("_").replace("_", "-")] = str(value)

    element = _FACTORY.new_tag(name, attrs=attributes)
    for child in children:
        if child is None:
            continue
        element.append(child if isinstance(child, Tag) else str(child))
    return element


def _icon(name: str, extra: str = "") -> Tag:
    return tag("i", class_=f"bi {name} {extra}".strip())


def _message_row(columns: int, *children, class_: str = "text-center py-5") -> Tag:
    return tag("tr", tag("td", *children, colspan=columns, class_=class_))


# Documents


def empty_documents_row() -> Tag:
    """Empty-state row with a link to the add page."""
    return _message_row(
        DOCUMENT_COLUMNS,
        _icon("bi-file-earmark-x", "display-4 text-muted mb-3"),
        tag("p", "Guvohnomalar mavjud emas", class_="h5"),
        tag(
            "a",
            _icon("bi-plus-circle"),
            " Birinchi guvohnomani yarating",
            href=page_url("documents_add"),
            class_="btn btn-primary mt-2",
        ),
    )


def category_badges(document: Document) -> list[Tag]:
    if not document.categories:
        return [tag("span", "N/A", class_="badge bg-secondary")]
    return [
        tag("span", category.value, class_="badge bg-warning bg-gradient me-1")
        for category in document.categories
    ]


def document_row(document: Document, index: int) -> Tag:
    """Table row for one certificate.

    Args:
        document: Certificate to render
        index: 1-based row number
    """
    actions = tag(
        "div",
        tag(
            "a",
            _icon("bi-eye"),
            " Ko'rish",
            href=page_url("certificate", id=document.id),
            class_="btn btn-info btn-sm",
        ),
        tag(
            "button",
            _icon("bi-pencil"),
            class_="btn btn-sm btn-outline-warning",
            title="Tahrirlash",
            data_action="edit",
            data_id=document.id,
        ),
        tag(
            "button",
            _icon("bi-trash"),
            class_="btn btn-sm btn-outline-danger",
            title="O'chirish",
            data_action="delete",
            data_id=document.id,
        ),
        tag(
            "button",
            _icon("bi-printer"),
            class_="btn btn-sm btn-outline-success",
            title="Chop etish",
            data_action="print",
            data_id=document.id,
        ),
        class_="btn-group",
        role="group",
    )

    student = tag(
        "div",
        tag("div", _icon("bi-person-circle", "text-primary"), class_="avatar me-3"),
        tag(
            "div",
            tag("h6", document.student_name or "Noma'lum", class_="mb-0"),
            tag("small", "Talaba", class_="text-muted"),
        ),
        class_="d-flex align-items-center",
    )

    period = f"{format_date(document.course_start)} - {format_date(document.course_end)}"

    return tag(
        "tr",
        tag("td", tag("strong", index)),
        tag("td", tag("span", f"№{document.display_number}", class_="badge-certificate")),
        tag("td", student),
        tag("td", tag("code", document.student_jshshir or "Mavjud emas")),
        tag("td", *category_badges(document)),
        tag("td", tag("span", period, class_="badge bg-info bg-gradient")),
        tag("td", tag("span", format_date(document.exam_date), class_="badge bg-success bg-gradient")),
        tag("td", actions, class_="text-center"),
        data_id=document.id,
    )


def document_rows(documents: list[Document]) -> list[Tag]:
    """Rows for the certificate table, or the empty-state row."""
    if not documents:
        return [empty_documents_row()]
    return [document_row(document, i) for i, document in enumerate(documents, start=1)]


# Students


def students_loading_row() -> Tag:
    return _message_row(
        STUDENT_COLUMNS,
        tag("div", class_="spinner-border text-primary"),
        tag("p", "Yuklanmoqda...", class_="mt-2"),
    )


def students_empty_row() -> Tag:
    return _message_row(
        STUDENT_COLUMNS,
        _icon("bi-people", "display-4 d-block mb-3"),
        "Hech qanday o'quvchi topilmadi",
        class_="text-center py-5 text-muted",
    )


def students_error_row() -> Tag:
    return _message_row(
        STUDENT_COLUMNS,
        _icon("bi-exclamation-triangle", "display-4 d-block mb-3"),
        "Xatolik yuz berdi",
        class_="text-center py-5 text-danger",
    )


def student_row(student: Student, index: int) -> Tag:
    """Table row for one student."""
    actions = tag(
        "td",
        tag(
            "a",
            _icon("bi-eye"),
            href=page_url("students_view", jshshir=student.jshshir),
            class_="btn btn-sm btn-primary me-1",
            title="Ko'rish",
        ),
        tag(
            "a",
            _icon("bi-pencil"),
            href=page_url("students_edit", jshshir=student.jshshir),
            class_="btn btn-sm btn-warning me-1",
            title="Tahrirlash",
        ),
        tag(
            "button",
            _icon("bi-trash"),
            class_="btn btn-sm btn-danger",
            title="O'chirish",
            data_action="delete",
            data_jshshir=student.jshshir,
        ),
        class_="text-center",
    )

    return tag(
        "tr",
        tag("td", index),
        tag("td", tag("strong", student.jshshir)),
        tag("td", student.full_name),
        tag("td", format_date_for_input(student.birth_date)),
        tag("td", student.display_phone or "-"),
        actions,
        data_jshshir=student.jshshir,
    )


def student_rows(students: list[Student]) -> list[Tag]:
    """Rows for the student table, or the empty-state row."""
    if not students:
        return [students_empty_row()]
    return [student_row(student, i) for i, student in enumerate(students, start=1)]


# Overlays


def alert_class(level: str) -> str:
    """Bootstrap alert class for a notification level."""
    return _ALERT_STYLES.get(level, _ALERT_STYLES["info"])[0]


def alert(message: str, level: str = "success", dismiss_after: float = 3.0) -> Tag:
    """Dismissible alert box shown at the top of the page."""
    style, icon = _ALERT_STYLES.get(level, _ALERT_STYLES["info"])
    return tag(
        "div",
        _icon(icon, "me-2"),
        message,
        tag("button", type="button", class_="btn-close", data_bs_dismiss="alert"),
        class_=(
            f"alert {style} alert-dismissible fade show position-fixed "
            "top-0 start-50 translate-middle-x mt-3"
        ),
        role="alert",
        data_dismiss_after=dismiss_after,
    )


def qr_modal(cert_number: str, url: str, element_id: str = "qrModal") -> Tag:
    """Modal showing the verification QR code of a certificate."""
    header = tag(
        "div",
        tag("h5", "QR Code", class_="modal-title"),
        tag("button", class_="btn-close", data_bs_dismiss="modal"),
        class_="modal-header",
    )
    body = tag(
        "div",
        tag("div", qr_svg(url), id="qrcode", data_url=url),
        tag("p", cert_number, class_="mt-2 small"),
        class_="modal-body text-center",
    )
    return tag(
        "div",
        tag(
            "div",
            tag("div", header, body, class_="modal-content"),
            class_="modal-dialog modal-sm modal-dialog-centered",
        ),
        id=element_id,
        class_="modal fade show",
    )
