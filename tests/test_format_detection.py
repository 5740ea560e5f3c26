import pytest

from studyguide.errors import InvalidFileTypeError
from studyguide.ingest import DocumentFormat, DocumentFormatDetector


@pytest.mark.parametrize(
    ("mime_type", "expected"),
    (
        ("application/pdf", DocumentFormat.PDF),
        ("application/msword", DocumentFormat.DOC),
        ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", DocumentFormat.DOCX),
        ("application/vnd.ms-powerpoint", DocumentFormat.PPT),
        ("application/vnd.openxmlformats-officedocument.presentationml.presentation", DocumentFormat.PPTX),
    ),
)
def test_detect_accepts_allowed_mime_types(mime_type: str, expected: DocumentFormat) -> None:
    assert DocumentFormatDetector.detect("upload.bin", mime_type) is expected


def test_declared_mime_type_wins_over_file_name() -> None:
    with pytest.raises(InvalidFileTypeError) as excinfo:
        DocumentFormatDetector.detect("notes.pdf", "text/plain")

    assert excinfo.value.mime_type == "text/plain"
    assert excinfo.value.user_message == "Please upload a valid PDF, Word, or PowerPoint file."


def test_mime_parameters_are_ignored() -> None:
    assert DocumentFormatDetector.detect("x", "Application/PDF; charset=binary") is DocumentFormat.PDF


@pytest.mark.parametrize("mime_type", (None, "", "application/octet-stream"))
def test_file_name_is_used_when_type_is_undeclared(mime_type) -> None:
    assert DocumentFormatDetector.detect("slides.pptx", mime_type) is DocumentFormat.PPTX


def test_unknown_extension_without_type_is_rejected() -> None:
    with pytest.raises(InvalidFileTypeError):
        DocumentFormatDetector.detect("archive.zip", None)


def test_allowed_mime_types_lists_five_formats() -> None:
    assert len(DocumentFormatDetector.allowed_mime_types()) == 5
