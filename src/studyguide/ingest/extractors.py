"""Extractors for supported document types."""
from __future__ import annotations

import io
import logging
import re
import xml.etree.ElementTree as ET
import zipfile
from abc import ABC, abstractmethod
from typing import List

from PyPDF2 import PdfReader

from ..errors import ExtractionError

LOGGER = logging.getLogger(__name__)

_DRAWINGML_TEXT = "{http://schemas.openxmlformats.org/drawingml/2006/main}t"
_SLIDE_PART_RE = re.compile(r"^ppt/slides/slide(\d+)\.xml$")


class TextExtractor(ABC):
    """Turns the raw bytes of one document format into plain text."""

    format_name: str = "unknown"

    @abstractmethod
    def extract_units(self, data: bytes, file_name: str = "document") -> List[str]:
        """Return the text of each page/slide, already terminated."""

    def extract(self, data: bytes, file_name: str = "document") -> str:
        return "".join(self.extract_units(data, file_name))


class PDFExtractor(TextExtractor):
    """Extract text from PDF documents page by page.

    The fragments of a page are joined with single spaces and each page ends
    with a newline. Page order is authoritative, no column detection is done.
    """

    format_name = "pdf"

    def extract_units(self, data: bytes, file_name: str = "document") -> List[str]:
        try:
            reader = PdfReader(io.BytesIO(data))
            if reader.is_encrypted:
                reader.decrypt("")
            pages = list(reader.pages)
        except Exception as error:
            LOGGER.warning("PyPDF2 could not open %s: %s", file_name, error)
            raise ExtractionError(file_name, self.format_name, cause=error) from error

        units: List[str] = []
        for index, page in enumerate(pages, start=1):
            try:
                raw = page.extract_text() or ""
            except Exception as error:
                LOGGER.warning("Failed to extract text from page %s of %s: %s", index, file_name, error)
                raise ExtractionError(file_name, self.format_name, cause=error) from error
            units.append(" ".join(raw.split()) + "\n")
        LOGGER.debug("Extracted %s pages from %s", len(units), file_name)
        return units


class WordExtractor(TextExtractor):
    """Extract raw text from Microsoft Word documents.

    Formatting is dropped. Paragraphs and tables are read in document order;
    each table row becomes one tab separated line.
    """

    format_name = "word"

    def extract_units(self, data: bytes, file_name: str = "document") -> List[str]:
        from docx import Document as DocxDocument
        from docx.table import Table

        try:
            document = DocxDocument(io.BytesIO(data))
        except Exception as error:
            LOGGER.warning("python-docx failed to parse %s: %s", file_name, error)
            raise ExtractionError(file_name, self.format_name, cause=error) from error

        text_parts: List[str] = []
        for block in document.iter_inner_content():
            if isinstance(block, Table):
                text_parts.extend(self._table_lines(block))
            elif block.text:
                text_parts.append(block.text)
        return ["\n\n".join(text_parts)]

    @staticmethod
    def _table_lines(table) -> List[str]:
        lines = []
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                lines.append("\t".join(cells))
        return lines


class PresentationExtractor(TextExtractor):
    """Extract slide text from PowerPoint (PPTX) packages.

    Slides are read from ``ppt/slides/slide<N>.xml`` in ascending ``N``; the
    archive's own entry order is not meaningful. Slides without text are
    skipped.
    """

    format_name = "pptx"

    def extract_units(self, data: bytes, file_name: str = "document") -> List[str]:
        units: List[str] = []
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                for part_name in self._slide_parts(archive.namelist()):
                    root = ET.fromstring(archive.read(part_name))
                    runs = [node.text for node in root.iter(_DRAWINGML_TEXT) if node.text]
                    if runs:
                        units.append(f"[Slide] {' '.join(runs)}\n\n")
        except Exception as error:
            LOGGER.warning("Failed to read presentation %s: %s", file_name, error)
            raise ExtractionError(file_name, self.format_name, cause=error) from error
        LOGGER.debug("Extracted %s slides with text from %s", len(units), file_name)
        return units

    @staticmethod
    def _slide_parts(names: List[str]) -> List[str]:
        numbered = []
        for name in names:
            match = _SLIDE_PART_RE.match(name)
            if match:
                numbered.append((int(match.group(1)), name))
        return [name for _, name in sorted(numbered)]
