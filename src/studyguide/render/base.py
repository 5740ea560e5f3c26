"""Common renderer contract."""
from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import RenderedArtifact

DOCX_FILE_NAME = "My_Study_Guide.docx"
PDF_FILE_NAME = "My_Study_Guide.pdf"

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MEDIA_TYPE = "application/pdf"
HTML_MEDIA_TYPE = "text/html"


class GuideRenderer(ABC):
    """Converts a study guide into a downloadable or displayable artifact."""

    @abstractmethod
    def render(self, title: str, source_file_name: str, guide_markdown: str) -> RenderedArtifact:
        """Render ``guide_markdown`` without modifying it."""


def source_line(source_file_name: str) -> str:
    return f"Source File: {source_file_name}"
