"""Shared fixtures: generated course documents and an offline guide service."""
from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Iterator, List

import pytest
from docx import Document
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from studyguide.config import Settings
from studyguide.llm import MockGenerationBackend
from studyguide.services.guide import GuideService

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PPTX_MIME = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

_SLIDE_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<p:sld xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main">'
    "<p:cSld><p:spTree>{shapes}</p:spTree></p:cSld></p:sld>"
)
_SHAPE_XML = "<p:sp><p:txBody><a:p><a:r><a:t>{text}</a:t></a:r></a:p></p:txBody></p:sp>"


def make_pdf(pages: List[str]) -> bytes:
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4, invariant=1)
    for text in pages:
        if text:
            pdf.setFont("Helvetica", 12)
            pdf.drawString(72, 720, text)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def make_docx(paragraphs: List[str], table_rows: List[List[str]] | None = None) -> bytes:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    if table_rows:
        table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for row, values in zip(table.rows, table_rows):
            for cell, value in zip(row.cells, values):
                cell.text = value
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def slide_xml(*runs: str) -> str:
    return _SLIDE_XML.format(shapes="".join(_SHAPE_XML.format(text=run) for run in runs))


def make_pptx(slides: dict[str, str]) -> bytes:
    """Build a minimal presentation archive; entries keep the given order."""

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("[Content_Types].xml", "<Types/>")
        for name, xml in slides.items():
            archive.writestr(name, xml)
    return buffer.getvalue()


@pytest.fixture
def three_page_pdf() -> bytes:
    return make_pdf(["A.", "B.", "C."])


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        backend="mock",
        guide_title="Test Guide",
        preferences_path=tmp_path / "prefs" / "preferences.json",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def mock_backend() -> MockGenerationBackend:
    return MockGenerationBackend()


@pytest.fixture
def guide_service(settings: Settings, mock_backend: MockGenerationBackend) -> GuideService:
    return GuideService(settings, backend=mock_backend)


@pytest.fixture
def client(guide_service: GuideService) -> Iterator[object]:
    from fastapi.testclient import TestClient

    from studyguide.main import app
    from studyguide.services.guide import get_guide_service

    app.dependency_overrides[get_guide_service] = lambda: guide_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def pdf_factory():
    return make_pdf


@pytest.fixture
def docx_factory():
    return make_docx


@pytest.fixture
def pptx_factory():
    return make_pptx


@pytest.fixture
def slide_factory():
    return slide_xml
