"""Exceptions raised while turning a course document into a study guide."""
from __future__ import annotations


class StudyGuideError(RuntimeError):
    """Base class for pipeline failures that can be reported to the user."""

    user_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None, *, cause: Exception | None = None) -> None:
        super().__init__(message or self.user_message)
        self.__cause__ = cause


class InvalidFileTypeError(StudyGuideError):
    """Raised when an upload is not a PDF, Word or PowerPoint document."""

    user_message = "Please upload a valid PDF, Word, or PowerPoint file."

    def __init__(self, file_name: str, mime_type: str | None) -> None:
        super().__init__(f"Unsupported file type for {file_name!r}: {mime_type or 'unknown'}")
        self.file_name = file_name
        self.mime_type = mime_type


class ExtractionError(StudyGuideError):
    """Raised when a document cannot be decoded by its extractor."""

    user_message = "The file could not be read. It may be corrupt or password protected."

    def __init__(self, file_name: str, document_format: str, *, cause: Exception | None = None) -> None:
        super().__init__(f"Failed to extract text from {file_name} ({document_format})", cause=cause)
        self.file_name = file_name
        self.document_format = document_format


class EmptyContentError(StudyGuideError):
    """Raised when extraction succeeds but yields no usable text."""

    user_message = "The file seems to be empty or unreadable."


class ConfigurationError(StudyGuideError):
    """Raised when the generation backend is missing credentials or settings."""

    user_message = "The study guide service is not configured. Please contact the administrator."


class ServiceError(StudyGuideError):
    """Raised when the generation service call fails."""

    user_message = "The study guide could not be generated. Please try again later."


class SessionBusyError(RuntimeError):
    """Raised when a new upload arrives while a session is still working."""


class GuideNotReadyError(RuntimeError):
    """Raised when an export is requested before a guide has been generated."""
