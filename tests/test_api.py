"""End-to-end tests of the HTTP API with the mock generation backend."""
from __future__ import annotations

import io

from docx import Document

from studyguide.config import Settings
from studyguide.llm import MockGenerationBackend
from studyguide.main import app
from studyguide.preferences import DEFAULT_LOGO, LogoPreferences
from studyguide.services.guide import GuideService, get_guide_service

PDF_MIME = "application/pdf"


def _upload(client, data: bytes, *, mime: str = PDF_MIME, name: str = "course.pdf", language: str = "English"):
    return client.post(
        "/sessions/demo/guide",
        files={"file": (name, data, mime)},
        data={"language": language},
    )


def test_root_and_formats(client) -> None:
    assert client.get("/").text == "ok"
    assert PDF_MIME in client.get("/formats").json()["mime_types"]


def test_healthz_reports_mock_backend(client) -> None:
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["backend"] == "mock"


def test_healthz_without_credentials_is_unavailable(tmp_path) -> None:
    service = GuideService(Settings(backend="gemini", api_key=None, preferences_path=tmp_path / "p.json"))
    app.dependency_overrides[get_guide_service] = lambda: service
    try:
        from fastapi.testclient import TestClient

        response = TestClient(app).get("/healthz")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert "GEMINI_API_KEY" in response.json()["detail"]


def test_upload_generates_guide_in_requested_language(client, three_page_pdf: bytes, mock_backend) -> None:
    response = _upload(client, three_page_pdf, language="French")

    assert response.status_code == 200
    payload = response.json()
    assert payload["state"] == "done"
    assert payload["file_name"] == "course.pdf"
    assert payload["language"] == "French"
    assert payload["guide"].startswith("## Chapter 1: Overview")
    assert payload["truncated"] is False
    assert "written in French" in mock_backend.last_call.instruction

    status = client.get("/sessions/demo").json()
    assert status["state"] == "done"


def test_exports_are_attachments_with_fixed_names(client, three_page_pdf: bytes) -> None:
    _upload(client, three_page_pdf)

    docx_response = client.get("/sessions/demo/export/docx")
    pdf_response = client.get("/sessions/demo/export/pdf")
    preview_response = client.get("/sessions/demo/preview")

    assert docx_response.status_code == 200
    assert 'filename="My_Study_Guide.docx"' in docx_response.headers["content-disposition"]
    headings = [p.text for p in Document(io.BytesIO(docx_response.content)).paragraphs]
    assert headings[0] == "Test Guide"
    assert "Chapter 1: Overview" in headings

    assert pdf_response.status_code == 200
    assert pdf_response.headers["content-type"] == "application/pdf"
    assert 'filename="My_Study_Guide.pdf"' in pdf_response.headers["content-disposition"]
    assert pdf_response.content.startswith(b"%PDF")

    assert preview_response.status_code == 200
    assert "<h2>Chapter 1: Overview</h2>" in preview_response.text


def test_unknown_session_is_not_found(client, guide_service) -> None:
    for suffix in ("", "/export/docx", "/export/pdf", "/preview"):
        path = f"/sessions/ghost{suffix}"
        assert client.get(path).status_code == 404
    assert client.post("/sessions/ghost/reset").status_code == 404
    assert guide_service.session_count == 0


def test_export_without_guide_conflicts(client) -> None:
    _upload(client, b"hello", mime="text/plain", name="notes.txt")

    assert client.get("/sessions/demo/export/pdf").status_code == 409
    assert client.get("/sessions/demo/preview").status_code == 409


def test_invalid_type_is_rejected(client, mock_backend) -> None:
    response = _upload(client, b"hello", mime="text/plain", name="notes.txt")

    assert response.status_code == 415
    assert response.json()["detail"] == "Please upload a valid PDF, Word, or PowerPoint file."
    assert client.get("/sessions/demo").json()["state"] == "error"
    assert mock_backend.calls == []


def test_empty_document_is_unprocessable(client, pdf_factory) -> None:
    response = _upload(client, pdf_factory([""]))

    assert response.status_code == 422
    assert response.json()["detail"] == "The file seems to be empty or unreadable."


def test_unknown_language_is_unprocessable(client, three_page_pdf: bytes) -> None:
    assert _upload(client, three_page_pdf, language="Klingon").status_code == 422


def test_service_failure_maps_to_bad_gateway(settings: Settings, three_page_pdf: bytes) -> None:
    class FailingBackend(MockGenerationBackend):
        def generate(self, instruction, content, *, enable_search=True):
            raise ConnectionError("upstream refused")

    service = GuideService(settings, backend=FailingBackend())
    app.dependency_overrides[get_guide_service] = lambda: service
    try:
        from fastapi.testclient import TestClient

        response = _upload(TestClient(app), three_page_pdf)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 502
    assert response.json()["detail"] == "The study guide could not be generated. Please try again later."


def test_reset_returns_to_idle(client, three_page_pdf: bytes, guide_service) -> None:
    _upload(client, three_page_pdf)

    payload = client.post("/sessions/demo/reset").json()

    assert payload["state"] == "idle"
    assert payload["guide"] is None
    assert payload["file_name"] is None
    assert guide_service.find_session("demo") is None
    assert client.get("/sessions/demo").status_code == 404


def test_logo_preference_round_trip(client) -> None:
    initial = client.get("/preferences/logo").json()
    assert initial["is_default"] is True
    assert initial["logo"].startswith("data:image/svg+xml;base64,")

    stored = client.put("/preferences/logo", files={"file": ("logo.png", b"\x89PNG", "image/png")})
    assert stored.status_code == 200
    assert stored.json()["logo"].startswith("data:image/png;base64,")

    current = client.get("/preferences/logo").json()
    assert current == {"logo": stored.json()["logo"], "is_default": False}


def test_non_image_logo_is_rejected(client) -> None:
    response = client.put("/preferences/logo", files={"file": ("logo.txt", b"text", "text/plain")})

    assert response.status_code == 415


def test_logo_lookup_reads_the_store_once(settings: Settings) -> None:
    class CountingStore:
        def __init__(self) -> None:
            self.reads = 0

        def get(self, key):
            self.reads += 1
            return None

        def set(self, key, value):
            raise AssertionError("unexpected write")

    store = CountingStore()
    service = GuideService(settings, backend=MockGenerationBackend(), preferences=LogoPreferences(store))
    app.dependency_overrides[get_guide_service] = lambda: service
    try:
        from fastapi.testclient import TestClient

        payload = TestClient(app).get("/preferences/logo").json()
    finally:
        app.dependency_overrides.clear()

    assert payload == {"logo": DEFAULT_LOGO, "is_default": True}
    assert store.reads == 1
