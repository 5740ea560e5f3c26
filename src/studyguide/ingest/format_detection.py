"""Utilities for validating the format of uploaded documents."""
from __future__ import annotations

import mimetypes
from enum import Enum
from pathlib import Path
from typing import Optional

from ..errors import InvalidFileTypeError

# Browsers and HTTP clients send this when they do not know the type.
_UNDECLARED_TYPES = {"", "application/octet-stream", "binary/octet-stream"}


class DocumentFormat(str, Enum):
    """Supported document formats."""

    PDF = "pdf"
    DOC = "doc"
    DOCX = "docx"
    PPT = "ppt"
    PPTX = "pptx"


class DocumentFormatDetector:
    """Maps a declared MIME type onto the closed set of supported formats."""

    MIME_MAP = {
        "application/pdf": DocumentFormat.PDF,
        "application/msword": DocumentFormat.DOC,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentFormat.DOCX,
        "application/vnd.ms-powerpoint": DocumentFormat.PPT,
        "application/vnd.openxmlformats-officedocument.presentationml.presentation": DocumentFormat.PPTX,
    }

    @classmethod
    def allowed_mime_types(cls) -> list[str]:
        return list(cls.MIME_MAP)

    @classmethod
    def detect(cls, file_name: str, mime_type: Optional[str] = None) -> DocumentFormat:
        """Return the detected document format.

        An explicitly declared MIME type is authoritative: if it is not in the
        allow-list the upload is rejected even when the file name looks right.
        Only when no type was declared is the type guessed from the file name.
        """

        declared = (mime_type or "").split(";", 1)[0].strip().lower()
        if declared not in _UNDECLARED_TYPES:
            try:
                return cls.MIME_MAP[declared]
            except KeyError:
                raise InvalidFileTypeError(file_name, mime_type) from None

        guessed_type, _ = mimetypes.guess_type(file_name)
        if guessed_type and guessed_type in cls.MIME_MAP:
            return cls.MIME_MAP[guessed_type]

        suffix = Path(file_name).suffix.lower().lstrip(".")
        try:
            return DocumentFormat(suffix)
        except ValueError:
            raise InvalidFileTypeError(file_name, mime_type) from None
