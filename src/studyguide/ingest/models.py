"""Data models used by the extraction pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .format_detection import DocumentFormat


@dataclass(frozen=True, slots=True)
class SourceDocument:
    """An uploaded document exactly as received."""

    content: bytes
    file_name: str
    mime_type: Optional[str] = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True, slots=True)
class ExtractedText:
    """Plain text produced from a single :class:`SourceDocument`."""

    text: str
    file_name: str
    document_format: DocumentFormat
    page_count: int = 1
    source_language: Optional[str] = None

    def is_blank(self) -> bool:
        return not self.text.strip()
