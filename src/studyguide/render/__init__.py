"""Renderers turning a study guide into DOCX, PDF or HTML."""
from __future__ import annotations

from .base import DOCX_FILE_NAME, PDF_FILE_NAME, GuideRenderer
from .docx_renderer import DocxRenderer
from .grammar import BlankLine, Heading, TextLine, parse_guide
from .pdf_renderer import PdfLayoutConfig, PdfRenderer
from .preview import MarkdownPreviewRenderer

__all__ = [
    "BlankLine",
    "DOCX_FILE_NAME",
    "DocxRenderer",
    "GuideRenderer",
    "Heading",
    "MarkdownPreviewRenderer",
    "PDF_FILE_NAME",
    "PdfLayoutConfig",
    "PdfRenderer",
    "TextLine",
    "parse_guide",
]
