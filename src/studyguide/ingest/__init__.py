"""Document ingestion: format validation and text extraction."""
from __future__ import annotations

from .extractors import PDFExtractor, PresentationExtractor, TextExtractor, WordExtractor
from .format_detection import DocumentFormat, DocumentFormatDetector
from .models import ExtractedText, SourceDocument
from .pipeline import ExtractionPipeline, ExtractionPipelineConfig

__all__ = [
    "DocumentFormat",
    "DocumentFormatDetector",
    "ExtractedText",
    "ExtractionPipeline",
    "ExtractionPipelineConfig",
    "PDFExtractor",
    "PresentationExtractor",
    "SourceDocument",
    "TextExtractor",
    "WordExtractor",
]
