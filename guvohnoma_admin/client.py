"""HTTP clients for the guvohnoma admin REST API."""

import logging
import os
from typing import Any, TypeVar

import httpx
import pydantic
from pydantic import BaseModel

from .exceptions import APIError, NetworkError, NotFoundError, ParseError
from .models import (
    Dashboard,
    Document,
    DocumentDetail,
    DocumentInput,
    Invoice,
    InvoiceInput,
    InvoiceStatus,
    OperationResult,
    Student,
    StudentUpdate,
)
from .utils import DEFAULT_BASE_URL, DEFAULT_HEADERS, build_url, extract_error_message

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_TIMEOUT = 30.0


def _check_response(response: httpx.Response) -> None:
    """Raise APIError (or NotFoundError) for a non-OK response."""
    if response.is_success:
        return

    message = extract_error_message(response.text, response.status_code)
    logger.debug(f"{response.request.method} {response.request.url} -> {response.status_code}: {message}")

    if response.status_code == 404:
        raise NotFoundError(message, status_code=response.status_code)
    raise APIError(message, status_code=response.status_code)


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f"Invalid JSON from {response.request.url}: {e}") from e


def _unwrap_collection(data: Any) -> list:
    """Accept a bare array, a ``{"data": [...]}`` envelope, or null."""
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("data")
        if data is None:
            return []
    if not isinstance(data, list):
        raise ParseError(f"Expected a list, got {type(data).__name__}")
    return data


def _parse_model(model: type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ParseError(f"Invalid {model.__name__} data: {e}") from e


def _parse_models(model: type[ModelT], data: Any) -> list[ModelT]:
    return [_parse_model(model, item) for item in _unwrap_collection(data)]


def _parse_result(response: httpx.Response) -> OperationResult:
    if not response.content:
        return OperationResult()
    data = _decode_json(response)
    if not isinstance(data, dict):
        return OperationResult()
    return _parse_model(OperationResult, data)


class GuvohnomaClient:
    """Synchronous client for the admin panel API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize API client.

        Args:
            base_url: API server address (default: GUVOHNOMA_API_URL env var,
                falling back to http://localhost:8080)
            timeout: Per-request timeout in seconds (default: 30)
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = base_url or os.environ.get("GUVOHNOMA_API_URL") or DEFAULT_BASE_URL
        self.timeout = timeout
        self._client = httpx.Client(headers=DEFAULT_HEADERS, transport=transport)

        logger.debug(f"Initialized GuvohnomaClient for {self.base_url}")

    def _request(self, method: str, *parts, json: Any = None, params: dict | None = None) -> httpx.Response:
        url = build_url(self.base_url, "api", *parts)
        logger.debug(f"{method} {url}")

        try:
            response = self._client.request(method, url, json=json, params=params, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        _check_response(response)
        return response

    # Dashboard

    def get_dashboard(self) -> Dashboard:
        """Get aggregate user, student and document counts.

        Returns:
            Dashboard object

        Raises:
            NetworkError: If the request fails
            APIError: If the API answers with an error status
        """
        response = self._request("GET", "dashboard")
        return _parse_model(Dashboard, _decode_json(response))

    # Documents

    def get_documents(self) -> list[Document]:
        """Get all certificates.

        Returns:
            List of Document objects (empty if the API returns null)

        Raises:
            NetworkError: If the request fails
            APIError: If the API answers with an error status
            ParseError: If the response does not describe documents
        """
        response = self._request("GET", "documents")
        documents = _parse_models(Document, _decode_json(response))
        logger.info(f"Retrieved {len(documents)} documents")
        return documents

    def get_document(self, document_id: int) -> Document:
        """Get a single certificate.

        Raises:
            NotFoundError: If no certificate has this id
        """
        response = self._request("GET", "documents", document_id)
        return _parse_model(Document, _decode_json(response))

    def get_document_details(self, document_id: int) -> DocumentDetail:
        """Get a certificate with student data and its QR code image."""
        response = self._request("GET", "documents", document_id, "details")
        return _parse_model(DocumentDetail, _decode_json(response))

    def create_document(self, document: DocumentInput) -> OperationResult:
        """Create a certificate.

        Args:
            document: Certificate data; an empty certificate number lets the
                server assign the next one

        Returns:
            OperationResult with the assigned certificate number
        """
        response = self._request("POST", "documents", json=document.to_payload())
        result = _parse_result(response)
        logger.info(f"Created document for {document.student_jshshir} ({result.certificate_number})")
        return result

    def update_document(self, document_id: int, document: DocumentInput) -> OperationResult:
        """Replace all fields of a certificate."""
        response = self._request("PUT", "documents", document_id, json=document.to_payload())
        logger.info(f"Updated document {document_id}")
        return _parse_result(response)

    def delete_document(self, document_id: int) -> OperationResult:
        """Delete a certificate."""
        response = self._request("DELETE", "documents", document_id)
        logger.info(f"Deleted document {document_id}")
        return _parse_result(response)

    # Students

    def get_students(self) -> list[Student]:
        """Get all students.

        Returns:
            List of Student objects
        """
        response = self._request("GET", "students")
        students = _parse_models(Student, _decode_json(response))
        logger.info(f"Retrieved {len(students)} students")
        return students

    def get_student(self, jshshir: str) -> Student:
        """Get a student by JShShIR.

        Raises:
            NotFoundError: If the student does not exist
        """
        response = self._request("GET", "students", jshshir)
        return _parse_model(Student, _decode_json(response))

    def create_student(self, student: Student) -> OperationResult:
        """Register a new student."""
        response = self._request("POST", "students", json=student.model_dump(mode="json"))
        logger.info(f"Created student {student.jshshir}")
        return _parse_result(response)

    def update_student(self, jshshir: str, student: StudentUpdate) -> OperationResult:
        """Update name, birth date and phone of a student."""
        response = self._request("PUT", "students", jshshir, json=student.model_dump(mode="json"))
        logger.info(f"Updated student {jshshir}")
        return _parse_result(response)

    def delete_student(self, jshshir: str) -> OperationResult:
        """Delete a student."""
        response = self._request("DELETE", "students", jshshir)
        logger.info(f"Deleted student {jshshir}")
        return _parse_result(response)

    # Invoices

    def get_invoices(self) -> list[Invoice]:
        """Get all invoices, newest first."""
        response = self._request("GET", "invoices")
        return _parse_models(Invoice, _decode_json(response))

    def search_invoices(self, query: str) -> list[Invoice]:
        """Search invoices by JShShIR, student name, description or number.

        Args:
            query: Substring to search for (case-insensitive on the server)

        Returns:
            List of matching Invoice objects
        """
        response = self._request("GET", "invoices", "search", params={"q": query})
        return _parse_models(Invoice, _decode_json(response))

    def get_invoice(self, invoice_id: int) -> Invoice:
        """Get an invoice with student details."""
        response = self._request("GET", "invoices", invoice_id, "details")
        return _parse_model(Invoice, _decode_json(response))

    def create_invoice(self, invoice: InvoiceInput) -> OperationResult:
        """Issue an invoice to a registered student."""
        response = self._request("POST", "invoices", json=invoice.model_dump(mode="json"))
        result = _parse_result(response)
        logger.info(f"Created invoice {result.invoice_number} for {invoice.student_jshshir}")
        return result

    def update_invoice_status(self, invoice_id: int, status: InvoiceStatus) -> OperationResult:
        """Change the payment status of an invoice."""
        response = self._request("PUT", "invoices", invoice_id, "status", json={"status": InvoiceStatus(status).value})
        logger.info(f"Invoice {invoice_id} status -> {InvoiceStatus(status).value}")
        return _parse_result(response)

    def delete_invoice(self, invoice_id: int) -> OperationResult:
        """Delete an invoice."""
        response = self._request("DELETE", "invoices", invoice_id)
        logger.info(f"Deleted invoice {invoice_id}")
        return _parse_result(response)

    def close(self) -> None:
        """Close the client session."""
        self._client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


class AsyncGuvohnomaClient:
    """Asynchronous client for the admin panel API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize async API client.

        Args:
            base_url: API server address (default: GUVOHNOMA_API_URL env var,
                falling back to http://localhost:8080)
            timeout: Per-request timeout in seconds (default: 30)
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = base_url or os.environ.get("GUVOHNOMA_API_URL") or DEFAULT_BASE_URL
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        logger.debug(f"Initialized AsyncGuvohnomaClient for {self.base_url}")

    async def __aenter__(self):
        """Async context manager entry."""
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(headers=DEFAULT_HEADERS, transport=self._transport)
        return self._client

    async def aclose(self) -> None:
        """Close the client session."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, *parts, json: Any = None, params: dict | None = None) -> httpx.Response:
        url = build_url(self.base_url, "api", *parts)
        logger.debug(f"{method} {url}")

        try:
            response = await self._ensure_client().request(
                method, url, json=json, params=params, timeout=self.timeout
            )
        except httpx.HTTPError as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        _check_response(response)
        return response

    # Dashboard

    async def get_dashboard(self) -> Dashboard:
        """Get aggregate user, student and document counts."""
        response = await self._request("GET", "dashboard")
        return _parse_model(Dashboard, _decode_json(response))

    # Documents

    async def get_documents(self) -> list[Document]:
        """Get all certificates.

        Returns:
            List of Document objects (empty if the API returns null)
        """
        response = await self._request("GET", "documents")
        documents = _parse_models(Document, _decode_json(response))
        logger.info(f"Retrieved {len(documents)} documents")
        return documents

    async def get_document(self, document_id: int) -> Document:
        """Get a single certificate."""
        response = await self._request("GET", "documents", document_id)
        return _parse_model(Document, _decode_json(response))

    async def get_document_details(self, document_id: int) -> DocumentDetail:
        """Get a certificate with student data and its QR code image."""
        response = await self._request("GET", "documents", document_id, "details")
        return _parse_model(DocumentDetail, _decode_json(response))

    async def create_document(self, document: DocumentInput) -> OperationResult:
        """Create a certificate."""
        response = await self._request("POST", "documents", json=document.to_payload())
        result = _parse_result(response)
        logger.info(f"Created document for {document.student_jshshir} ({result.certificate_number})")
        return result

    async def update_document(self, document_id: int, document: DocumentInput) -> OperationResult:
        """Replace all fields of a certificate."""
        response = await self._request("PUT", "documents", document_id, json=document.to_payload())
        logger.info(f"Updated document {document_id}")
        return _parse_result(response)

    async def delete_document(self, document_id: int) -> OperationResult:
        """Delete a certificate."""
        response = await self._request("DELETE", "documents", document_id)
        logger.info(f"Deleted document {document_id}")
        return _parse_result(response)

    # Students

    async def get_students(self) -> list[Student]:
        """Get all students."""
        response = await self._request("GET", "students")
        students = _parse_models(Student, _decode_json(response))
        logger.info(f"Retrieved {len(students)} students")
        return students

    async def get_student(self, jshshir: str) -> Student:
        """Get a student by JShShIR."""
        response = await self._request("GET", "students", jshshir)
        return _parse_model(Student, _decode_json(response))

    async def create_student(self, student: Student) -> OperationResult:
        """Register a new student."""
        response = await self._request("POST", "students", json=student.model_dump(mode="json"))
        logger.info(f"Created student {student.jshshir}")
        return _parse_result(response)

    async def update_student(self, jshshir: str, student: StudentUpdate) -> OperationResult:
        """Update name, birth date and phone of a student."""
        response = await self._request("PUT", "students", jshshir, json=student.model_dump(mode="json"))
        logger.info(f"Updated student {jshshir}")
        return _parse_result(response)

    async def delete_student(self, jshshir: str) -> OperationResult:
        """Delete a student."""
        response = await self._request("DELETE", "students", jshshir)
        logger.info(f"Deleted student {jshshir}")
        return _parse_result(response)

    # Invoices

    async def get_invoices(self) -> list[Invoice]:
        """Get all invoices, newest first."""
        response = await self._request("GET", "invoices")
        return _parse_models(Invoice, _decode_json(response))

    async def search_invoices(self, query: str) -> list[Invoice]:
        """Search invoices by JShShIR, student name, description or number."""
        response = await self._request("GET", "invoices", "search", params={"q": query})
        return _parse_models(Invoice, _decode_json(response))

    async def get_invoice(self, invoice_id: int) -> Invoice:
        """Get an invoice with student details."""
        response = await self._request("GET", "invoices", invoice_id, "details")
        return _parse_model(Invoice, _decode_json(response))

    async def create_invoice(self, invoice: InvoiceInput) -> OperationResult:
        """Issue an invoice to a registered student."""
        response = await self._request("POST", "invoices", json=invoice.model_dump(mode="json"))
        result = _parse_result(response)
        logger.info(f"Created invoice {result.invoice_number} for {invoice.student_jshshir}")
        return result

    async def update_invoice_status(self, invoice_id: int, status: InvoiceStatus) -> OperationResult:
        """Change the payment status of an invoice."""
        response = await self._request(
            "PUT", "invoices", invoice_id, "status", json={"status": InvoiceStatus(status).value}
        )
        logger.info(f"Invoice {invoice_id} status -> {InvoiceStatus(status).value}")
        return _parse_result(response)

    async def delete_invoice(self, invoice_id: int) -> OperationResult:
        """Delete an invoice."""
        response = await self._request("DELETE", "invoices", invoice_id)
        logger.info(f"Deleted invoice {invoice_id}")
        return _parse_result(response)
