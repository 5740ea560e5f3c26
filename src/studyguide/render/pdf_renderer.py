"""Export a study guide as a paginated PDF.

Layout happens in two steps: :meth:`PdfRenderer.layout` walks the guide with a
vertical cursor (in millimetres from the top edge) and places every wrapped
line on a page, then :meth:`PdfRenderer.render` draws the placed lines with a
reportlab canvas.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import List

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from ..models import RenderedArtifact
from .base import PDF_FILE_NAME, PDF_MEDIA_TYPE, GuideRenderer, source_line
from .grammar import BlankLine, Heading, iter_blocks

LOGGER = logging.getLogger(__name__)

REGULAR_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
ITALIC_FONT = "Helvetica-Oblique"


@dataclass(frozen=True, slots=True)
class PlacedLine:
    text: str
    font: str
    size: float
    y: float


@dataclass(slots=True)
class PdfPage:
    lines: List[PlacedLine] = field(default_factory=list)
    rules: List[float] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PdfLayoutConfig:
    margin: float = 20.0
    line_height: float = 7.0
    blank_advance: float = 5.0
    heading_extra: float = 5.0
    title_size: float = 18.0
    source_size: float = 10.0
    heading_size: float = 14.0
    body_size: float = 11.0


class PdfRenderer(GuideRenderer):
    """Cursor-based PDF writer with automatic page breaks."""

    def __init__(self, config: PdfLayoutConfig | None = None, pagesize: tuple[float, float] = A4) -> None:
        self.config = config or PdfLayoutConfig()
        self.pagesize = pagesize
        self.page_width = pagesize[0] / mm
        self.page_height = pagesize[1] / mm

    @property
    def max_line_width(self) -> float:
        return self.page_width - self.config.margin * 2

    def wrap(self, text: str, font: str, size: float) -> List[str]:
        if not text:
            return []
        return simpleSplit(text, font, size, self.max_line_width * mm)

    def layout(self, title: str, source_file_name: str, guide_markdown: str) -> List[PdfPage]:
        cfg = self.config
        page = PdfPage()
        pages = [page]
        cursor = cfg.margin

        page.lines.append(PlacedLine(title, BOLD_FONT, cfg.title_size, cursor))
        cursor += 10
        page.lines.append(PlacedLine(source_line(source_file_name), ITALIC_FONT, cfg.source_size, cursor))
        cursor += 5
        page.rules.append(cursor)
        cursor += 10

        bottom = self.page_height - cfg.margin
        for block in iter_blocks(guide_markdown):
            if isinstance(block, BlankLine):
                cursor += cfg.blank_advance
                continue

            if isinstance(block, Heading):
                font, size = BOLD_FONT, cfg.heading_size
                cursor += cfg.heading_extra
            elif block.bold:
                font, size = BOLD_FONT, cfg.body_size
            else:
                font, size = REGULAR_FONT, cfg.body_size

            wrapped = self.wrap(block.text, font, size)
            if cursor + len(wrapped) * cfg.line_height > bottom:
                page = PdfPage()
                pages.append(page)
                cursor = cfg.margin

            for index, line in enumerate(wrapped):
                page.lines.append(PlacedLine(line, font, size, cursor + index * cfg.line_height))
            cursor += len(wrapped) * cfg.line_height

        return pages

    def render(self, title: str, source_file_name: str, guide_markdown: str) -> RenderedArtifact:
        pages = self.layout(title, source_file_name, guide_markdown)
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=self.pagesize, invariant=1)
        pdf.setTitle(title)
        left = self.config.margin * mm
        right = (self.page_width - self.config.margin) * mm

        for page in pages:
            for placed in page.lines:
                pdf.setFont(placed.font, placed.size)
                pdf.drawString(left, self.pagesize[1] - placed.y * mm, placed.text)
            for rule_y in page.rules:
                pdf.setLineWidth(0.5 * mm)
                y = self.pagesize[1] - rule_y * mm
                pdf.line(left, y, right, y)
            pdf.showPage()
        pdf.save()

        LOGGER.info("Rendered PDF guide for %s (%s pages)", source_file_name, len(pages))
        return RenderedArtifact(content=buffer.getvalue(), media_type=PDF_MEDIA_TYPE, file_name=PDF_FILE_NAME)
