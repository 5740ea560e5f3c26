"""High level extraction pipeline entry point."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional

from .extractors import PDFExtractor, PresentationExtractor, TextExtractor, WordExtractor
from .format_detection import DocumentFormat, DocumentFormatDetector
from .language import LanguageDetector
from .models import ExtractedText, SourceDocument
from .normalization import normalize_course_text

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ExtractionPipelineConfig:
    normalize_whitespace: bool = True
    detect_language: bool = True


class ExtractionPipeline:
    """Pipeline dispatching a document to its extractor and tidying the text."""

    def __init__(self, config: Optional[ExtractionPipelineConfig] = None) -> None:
        self.config = config or ExtractionPipelineConfig()
        word_extractor = WordExtractor()
        presentation_extractor = PresentationExtractor()
        self.extractors: Dict[DocumentFormat, TextExtractor] = {
            DocumentFormat.PDF: PDFExtractor(),
            DocumentFormat.DOC: word_extractor,
            DocumentFormat.DOCX: word_extractor,
            DocumentFormat.PPT: presentation_extractor,
            DocumentFormat.PPTX: presentation_extractor,
        }
        self.language_detector = LanguageDetector()

    def detect_format(self, document: SourceDocument) -> DocumentFormat:
        return DocumentFormatDetector.detect(document.file_name, document.mime_type)

    def extract(
        self,
        document: SourceDocument,
        document_format: Optional[DocumentFormat] = None,
    ) -> ExtractedText:
        """Extract the text of ``document``.

        Raises :class:`~studyguide.errors.InvalidFileTypeError` for unsupported
        uploads and :class:`~studyguide.errors.ExtractionError` for documents
        that cannot be decoded. An empty result is returned as-is; deciding
        whether it is acceptable is up to the caller.
        """

        document_format = document_format or self.detect_format(document)
        extractor = self.extractors[document_format]
        started = time.perf_counter()
        LOGGER.info(
            "Extracting %s (%s, %s bytes)", document.file_name, document_format.value, document.size_bytes
        )

        units = extractor.extract_units(document.content, document.file_name)
        text = "".join(units)
        if self.config.normalize_whitespace:
            text = normalize_course_text(text)

        language = self.language_detector.detect(text) if self.config.detect_language else None
        LOGGER.info(
            "Extracted %s characters from %s in %.3fs (units=%s, language=%s)",
            len(text),
            document.file_name,
            time.perf_counter() - started,
            len(units),
            language,
        )
        return ExtractedText(
            text=text,
            file_name=document.file_name,
            document_format=document_format,
            page_count=len(units),
            source_language=language,
        )
