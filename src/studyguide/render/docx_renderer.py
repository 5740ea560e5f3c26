"""Export a study guide as a Word document."""
from __future__ import annotations

import io
import logging

from docx import Document
from docx.shared import Pt

from ..models import RenderedArtifact
from .base import DOCX_FILE_NAME, DOCX_MEDIA_TYPE, GuideRenderer, source_line
from .grammar import BlankLine, Heading, iter_blocks

LOGGER = logging.getLogger(__name__)

DIVIDER = "_" * 48


class DocxRenderer(GuideRenderer):
    """Write one paragraph per non-blank guide line using python-docx.

    Only ``# `` and ``## `` lines become Word headings (levels 1 and 2).
    """

    heading_space_before = Pt(20)
    heading_space_after = Pt(10)
    paragraph_space_before = Pt(10)

    def build_document(self, title: str, source_file_name: str, guide_markdown: str):
        document = Document()
        document.core_properties.title = title

        document.add_heading(title, level=1)
        source = document.add_paragraph()
        source.add_run(source_line(source_file_name)).italic = True
        document.add_paragraph(DIVIDER)

        for block in iter_blocks(guide_markdown):
            if isinstance(block, BlankLine):
                continue
            if isinstance(block, Heading) and block.is_section:
                heading = document.add_heading(block.text, level=block.level)
                heading.paragraph_format.space_before = self.heading_space_before
                heading.paragraph_format.space_after = self.heading_space_after
                continue
            # Deeper or unspaced "#" lines stay ordinary paragraphs, hashes included.
            if isinstance(block, Heading):
                text, bold = block.line, False
            else:
                text, bold = block.text, block.bold
            paragraph = document.add_paragraph()
            paragraph.add_run(text).bold = bold
            paragraph.paragraph_format.space_before = self.paragraph_space_before
        return document

    def render(self, title: str, source_file_name: str, guide_markdown: str) -> RenderedArtifact:
        document = self.build_document(title, source_file_name, guide_markdown)
        buffer = io.BytesIO()
        document.save(buffer)
        LOGGER.info("Rendered DOCX guide for %s (%s bytes)", source_file_name, buffer.tell())
        return RenderedArtifact(content=buffer.getvalue(), media_type=DOCX_MEDIA_TYPE, file_name=DOCX_FILE_NAME)
