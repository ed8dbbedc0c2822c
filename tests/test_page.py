"""Tests for the page model, rendering helpers and notifications."""

import logging

import pytest

from guvohnoma_admin import Level, LoggingNotifier, Page, PageNotifier
from guvohnoma_admin.controllers import RequestTokens, busy_button
from guvohnoma_admin.models import Document
from guvohnoma_admin.rendering import alert, document_row, tag

from conftest import document_data

logger = logging.getLogger(__name__)

FORM_HTML = """
<html><body>
<form id="form">
  <input id="name" value="Vali">
  <textarea id="notes">eski</textarea>
  <select id="status">
    <option value="a">A</option>
    <option value="b" selected>B</option>
  </select>
  <input type="radio" name="grade" value="4" checked>
  <input type="radio" name="grade" value="5">
  <button type="submit"><i class="bi bi-save"></i> Saqlash</button>
</form>
</body></html>
"""


def test_form_values():
    page = Page(FORM_HTML, url="students-edit.html?jshshir=12345678901234&x=1")

    assert page.path == "students-edit.html"
    assert page.query_param("jshshir") == "12345678901234"
    assert page.query_param("missing") is None

    assert page.value("name") == "Vali"
    assert page.value("notes") == "eski"
    assert page.value("status") == "b"
    assert page.value("missing") == ""
    assert page.checked_value("grade") == "4"

    page.set_value("notes", "yangi")
    page.set_value("status", "a")
    assert page.check_radio("grade", 5) is True
    assert page.check_radio("grade", 3) is False

    assert page.value("notes") == "yangi"
    assert page.value("status") == "a"
    assert page.checked_value("grade") is None


def test_set_text_and_missing_elements():
    page = Page(FORM_HTML)

    assert page.set_text("missing", "x") is False
    assert page.replace_children("missing", []) is False
    assert page.remove("missing") is False
    assert page.submit_button("missing") is None


def test_confirm_declines_without_callback():
    assert Page(FORM_HTML).confirm("O'chirilsinmi?") is False
    assert Page(FORM_HTML, confirm=lambda message: True).confirm("O'chirilsinmi?") is True


@pytest.mark.asyncio
async def test_dispatch_runs_sync_and_async_handlers():
    page = Page(FORM_HTML)
    calls = []

    async def async_handler():
        calls.append("async")
        return 2

    page.bind("form", "submit", lambda: calls.append("sync") or 1)
    page.bind("form", "submit", async_handler)

    assert await page.dispatch("form", "submit") == [1, 2]
    assert calls == ["sync", "async"]
    assert await page.dispatch("form", "reset") == []


def test_busy_button_restores_on_error():
    page = Page(FORM_HTML)
    button = page.submit_button("form")

    with pytest.raises(RuntimeError):
        with busy_button(button, "Saqlanmoqda..."):
            assert button.has_attr("disabled")
            assert button.get_text(strip=True) == "Saqlanmoqda..."
            assert button.find("span", class_="spinner-border") is not None
            raise RuntimeError("network down")

    assert not button.has_attr("disabled")
    assert button.get_text(strip=True) == "Saqlash"
    assert button.find("i", class_="bi-save") is not None


def test_busy_button_without_button():
    with busy_button(None, "Yuklanmoqda..."):
        pass


def test_request_tokens():
    tokens = RequestTokens()

    first = tokens.issue("documents")
    other = tokens.issue("students")
    second = tokens.issue("documents")

    assert not tokens.is_current("documents", first)
    assert tokens.is_current("documents", second)
    assert tokens.is_current("students", other)


def test_tag_builder():
    element = tag("button", "Ok", None, class_="btn", data_id=5, title=None)

    assert element.name == "button"
    assert element["data-id"] == "5"
    assert not element.has_attr("title")
    assert element.get_text() == "Ok"


def test_document_row_badge_and_links():
    document = Document.model_validate(document_data(15, certificate_number="GUV-2024-015", categories="A"))

    row = document_row(document, 3)

    assert row["data-id"] == "15"
    assert row.find("strong").get_text() == "3"
    assert row.find("span", class_="badge-certificate").get_text() == "№015"
    assert row.find("a")["href"] == "certificate.html?id=15"
    assert [b["data-action"] for b in row.find_all("button")] == ["edit", "delete", "print"]
    assert "15.01.2024 - 15.03.2024" in row.get_text()


def test_document_row_missing_values():
    document = Document(id=1)

    row = document_row(document, 1)

    assert row.find("h6").get_text() == "Noma'lum"
    assert row.find("code").get_text() == "Mavjud emas"
    assert "— - —" in row.get_text()


def test_logging_notifier():
    notifier = LoggingNotifier()

    notifier.success("Saqlandi")
    notifier.error("Xatolik")
    notifier.notify("Tayyor", Level.INFO)

    assert notifier.messages() == ["Saqlandi", "Xatolik", "Tayyor"]
    assert notifier.messages(Level.ERROR) == ["Xatolik"]
    assert [n.dismiss_after for n in notifier.notices] == [3.0, 5.0, 3.0]
    assert notifier.last.message == "Tayyor"


def test_page_notifier_appends_alert():
    page = Page(FORM_HTML)
    notifier = PageNotifier(page)

    notifier.success("Saqlandi")

    element = page.body.find("div", role="alert")
    assert "alert-success" in element["class"]
    assert "Saqlandi" in element.get_text()
    assert notifier.messages() == ["Saqlandi"]


def test_page_notifier_replaces_alert_of_same_level():
    page = Page(FORM_HTML)
    notifier = PageNotifier(page)

    notifier.error("Birinchi xato")
    notifier.error("Ikkinchi xato")
    notifier.success("Saqlandi")

    alerts = page.body.find_all("div", role="alert")
    assert len(alerts) == 2
    assert "Ikkinchi xato" in alerts[0].get_text()
    assert "alert-danger" in alerts[0]["class"]
    assert "alert-success" in alerts[1]["class"]
    assert notifier.messages() == ["Birinchi xato", "Ikkinchi xato", "Saqlandi"]


def test_alert_unknown_level_falls_back_to_info():
    element = alert("Salom", "debug")

    assert "alert-info" in element["class"]
