"""Pytest configuration and fixtures for guvohnoma-admin tests."""

import json
import logging
import os

import httpx
import pytest
import pytest_asyncio
from dotenv import load_dotenv

from guvohnoma_admin import AsyncGuvohnomaClient, GuvohnomaClient, LoggingNotifier, Page

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Load environment variables
load_dotenv()

TEST_BASE_URL = "http://api.test"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires a live API via GUVOHNOMA_API_URL)",
    )


# Pages

DOCUMENTS_LIST_HTML = """
<html><body>
  <span id="totalCertificates">-</span>
  <span id="totalCount">-</span>
  <span id="thisMonth">-</span>
  <span id="withCertificate">-</span>
  <span id="printedToday">-</span>
  <table><tbody id="certificates-table-body"><tr><td>old</td></tr></tbody></table>
</body></html>
"""

_DOCUMENT_FIELDS = """
  <input type="text" id="jshshir">
  <input type="text" id="studentName">
  <input type="text" id="commissionNumber">
  <input type="text" id="directorName">
  <input type="text" id="directorSurname">
  <input type="checkbox" id="categoryA" value="A">
  <input type="checkbox" id="categoryB" value="B">
  <input type="checkbox" id="categoryC" value="C">
  <input type="checkbox" id="categoryD" value="D">
  <input type="checkbox" id="categoryE" value="E">
  <input type="checkbox" id="categoryF" value="F">
  <input type="radio" name="grade1" value="3"><input type="radio" name="grade1" value="4"><input type="radio" name="grade1" value="5">
  <input type="radio" name="grade2" value="3"><input type="radio" name="grade2" value="4"><input type="radio" name="grade2" value="5">
  <input type="date" id="courseStartDate">
  <input type="date" id="courseEndDate">
  <input type="date" id="examDate">
  <input type="number" id="courseHours">
  <button type="submit"><i class="bi bi-save"></i> Saqlash</button>
"""

DOCUMENT_ADD_HTML = f"""
<html><body>
<form id="addCertificateForm">{_DOCUMENT_FIELDS}</form>
</body></html>
"""

DOCUMENT_EDIT_HTML = f"""
<html><body>
<form id="editCertificateForm">{_DOCUMENT_FIELDS}</form>
</body></html>
"""

STUDENTS_LIST_HTML = """
<html><body>
  <span id="totalStudents">0</span>
  <table><tbody id="students-table-body"></tbody></table>
</body></html>
"""

STUDENT_EDIT_HTML = """
<html><body>
<form id="editStudentForm">
  <span id="editJshshirDisplay"></span>
  <input type="text" id="editFullName">
  <input type="date" id="editBirthDate">
  <input type="tel" id="editPhone">
  <button type="submit"><i class="bi bi-check-circle me-2"></i>Saqlash</button>
</form>
</body></html>
"""

STUDENT_ADD_HTML = """
<html><body>
<form id="addStudentForm">
  <input type="text" id="jshshir">
  <input type="text" id="fullName">
  <input type="date" id="birthDate">
  <input type="tel" id="phone">
  <button type="submit">Qo'shish</button>
</form>
</body></html>
"""

INDEX_HTML = """
<html><body>
  <header><i class="bi bi-list toggle-sidebar-btn"></i></header>
  <aside id="sidebar" class="sidebar"></aside>
  <h6 id="usersCount">...</h6>
  <h6 id="studentsCount">...</h6>
  <h6 id="documentsCount">...</h6>
</body></html>
"""

LOGIN_HTML = """
<html><body>
  <input type="text" id="login">
  <input type="password" id="password">
  <div id="error"></div>
  <button id="btnLogin">Kirish</button>
</body></html>
"""


def document_data(document_id: int = 1, **overrides) -> dict:
    """Document JSON as the API returns it."""
    data = {
        "id": document_id,
        "title": "Traktor haydovchisi guvohnomasi",
        "student_jshshir": "12345678901234",
        "student_name": "Aliyev Vali",
        "course_start": "2024-01-15",
        "course_end": "2024-03-15",
        "exam_date": "2024-03-20",
        "categories": "B,C",
        "course_hours": 120,
        "grade1": 5,
        "grade2": 4,
        "certificate_number": f"GUV-2024-{document_id:03d}",
        "status": "active",
        "commission_number": "K-12",
        "director_name": "N. ILYASOVA",
        "created_at": "2024-03-20T10:00:00Z",
    }
    data.update(overrides)
    return data


def student_data(jshshir: str = "12345678901234", **overrides) -> dict:
    """Student JSON as the API returns it."""
    data = {
        "jshshir": jshshir,
        "full_name": "Aliyev Vali",
        "birth_date": "2000-05-01T00:00:00Z",
        "phone": "+998901234567",
    }
    data.update(overrides)
    return data


def collection_response(items: list) -> httpx.Response:
    """Serve a list the way the Go backend does: an empty slice goes out as ``null``."""
    if not items:
        return httpx.Response(200, content=b"null", headers={"content-type": "application/json"})
    return httpx.Response(200, json=items)


class FakeAPI:
    """In-memory stand-in for the admin panel REST API.

    Serves the documents, students and dashboard endpoints from dicts and
    records every request. Set ``failures[(method, path)]`` to a Response to
    make a route fail.
    """

    def __init__(self):
        self.documents: dict[int, dict] = {}
        self.students: dict[str, dict] = {}
        self.dashboard = {"users": 3, "students": 0, "documents": 0}
        self.failures: dict[tuple[str, str], httpx.Response] = {}
        self.requests: list[httpx.Request] = []
        self._next_id = 1

    def add_document(self, **overrides) -> dict:
        data = document_data(self._next_id, **overrides)
        self.documents[data["id"]] = data
        self._next_id = data["id"] + 1
        return data

    def add_student(self, **overrides) -> dict:
        data = student_data(**overrides)
        self.students[data["jshshir"]] = data
        return data

    def calls(self, method: str, path: str | None = None) -> list[httpx.Request]:
        """Get recorded requests by method and optionally by path."""
        return [
            r for r in self.requests
            if r.method == method and (path is None or r.url.path == path)
        ]

    def payload(self, request: httpx.Request) -> dict:
        return json.loads(request.content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, request.url.path

        failure = self.failures.get((method, path))
        if failure is not None:
            return failure

        parts = path.strip("/").split("/")[1:]
        resource, key = parts[0], parts[1] if len(parts) > 1 else None

        if resource == "dashboard":
            return httpx.Response(200, json=self.dashboard)
        if resource == "documents":
            return self._documents(method, key, request)
        if resource == "students":
            return self._students(method, key, request)
        return httpx.Response(404, text="404 page not found")

    def _documents(self, method: str, key: str | None, request: httpx.Request) -> httpx.Response:
        if key is None:
            if method == "GET":
                # The backend encodes an empty slice as null
                return collection_response(list(self.documents.values()))
            if method == "POST":
                data = self.payload(request)
                document_id = self._next_id
                self._next_id += 1
                number = f"GUV-2024-{document_id:03d}"
                self.documents[document_id] = {**data, "id": document_id, "certificate_number": number}
                return httpx.Response(
                    201,
                    json={"status": "success", "id": document_id, "certificate_number": number},
                )
            return httpx.Response(405)

        document_id = int(key)
        if document_id not in self.documents:
            return httpx.Response(404, json={"error": "Document not found"})

        if method == "GET":
            return httpx.Response(200, json=self.documents[document_id])
        if method == "PUT":
            self.documents[document_id] = {**self.payload(request), "id": document_id}
            return httpx.Response(200, json={"status": "success", "message": "Document updated"})
        if method == "DELETE":
            del self.documents[document_id]
            return httpx.Response(200, json={"status": "success", "message": "Document deleted"})
        return httpx.Response(405)

    def _students(self, method: str, key: str | None, request: httpx.Request) -> httpx.Response:
        if key is None:
            if method == "GET":
                return collection_response(list(self.students.values()))
            if method == "POST":
                data = self.payload(request)
                self.students[data["jshshir"]] = data
                return httpx.Response(201, json={"status": "success", "message": "Student created"})
            return httpx.Response(405)

        if key not in self.students:
            return httpx.Response(404, json={"error": "Student not found"})

        if method == "GET":
            return httpx.Response(200, json=self.students[key])
        if method == "PUT":
            self.students[key] = {**self.payload(request), "jshshir": key}
            return httpx.Response(200, json={"status": "success", "message": "Student updated"})
        if method == "DELETE":
            del self.students[key]
            return httpx.Response(200, json={"status": "success", "message": "Student deleted"})
        return httpx.Response(405)


@pytest.fixture
def api():
    """Fresh in-memory API."""
    return FakeAPI()


@pytest.fixture
def client(api):
    """Synchronous client talking to the in-memory API."""
    with GuvohnomaClient(base_url=TEST_BASE_URL, transport=httpx.MockTransport(api.handler)) as client:
        yield client


@pytest_asyncio.fixture
async def async_client(api):
    """Async client talking to the in-memory API."""
    client = AsyncGuvohnomaClient(base_url=TEST_BASE_URL, transport=httpx.MockTransport(api.handler))

    async with client:
        yield client


@pytest.fixture
def notifier():
    return LoggingNotifier()


@pytest.fixture
def make_page():
    """Build a Page from HTML, optionally answering confirmations."""

    def _make(html: str, url: str = "", confirm: bool | None = None) -> Page:
        callback = None if confirm is None else (lambda message: confirm)
        return Page(html, url=url, confirm=callback)

    return _make


@pytest.fixture(scope="session")
def api_url():
    """Get the live API address from the environment.

    Raises:
        pytest.skip: If GUVOHNOMA_API_URL is not set
    """
    url = os.getenv("GUVOHNOMA_API_URL")
    if not url:
        pytest.skip("GUVOHNOMA_API_URL environment variable not set")
    return url
