"""Per-upload state machine driving extraction, generation and export."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .errors import (
    EmptyContentError,
    ExtractionError,
    GuideNotReadyError,
    InvalidFileTypeError,
    ServiceError,
    SessionBusyError,
    StudyGuideError,
)
from .ingest import ExtractionPipeline, SourceDocument
from .logging_config import AUDIT_LOGGER_NAME
from .models import RenderedArtifact, StudyGuide, StudyLanguage
from .render import DocxRenderer, GuideRenderer, MarkdownPreviewRenderer, PdfRenderer
from .requester import GuideRequester

LOGGER = logging.getLogger(__name__)
AUDIT_LOGGER = logging.getLogger(AUDIT_LOGGER_NAME)


class GuideState(str, Enum):
    IDLE = "idle"
    READING = "reading"
    GENERATING = "generating"
    DONE = "done"
    ERROR = "error"


BUSY_STATES = frozenset({GuideState.READING, GuideState.GENERATING})


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Serialisable view of a session used by the HTTP API."""

    session_id: str
    state: GuideState
    file_name: Optional[str]
    language: Optional[StudyLanguage]
    error_message: Optional[str]
    truncated: bool
    source_language: Optional[str]
    guide: Optional[str]


class GuideSession:
    """Runs one document at a time through ``idle → reading → generating → done``.

    Every failure ends in ``error`` with a single user-facing message; nothing
    is retried and no intermediate result is kept. A second upload while the
    session is reading or generating is rejected with
    :class:`~studyguide.errors.SessionBusyError`.
    """

    def __init__(
        self,
        pipeline: ExtractionPipeline,
        requester_factory: Callable[[], GuideRequester],
        *,
        session_id: str = "default",
        title: str = "Study Guide",
        docx_renderer: Optional[GuideRenderer] = None,
        pdf_renderer: Optional[GuideRenderer] = None,
        preview_renderer: Optional[GuideRenderer] = None,
    ) -> None:
        self.session_id = session_id
        self.title = title
        self.pipeline = pipeline
        self._requester_factory = requester_factory
        self.docx_renderer = docx_renderer or DocxRenderer()
        self.pdf_renderer = pdf_renderer or PdfRenderer()
        self.preview_renderer = preview_renderer or MarkdownPreviewRenderer()

        self._state = GuideState.IDLE
        self.history: List[GuideState] = [GuideState.IDLE]
        self._clear()

    @property
    def state(self) -> GuideState:
        return self._state

    @property
    def guide(self) -> Optional[StudyGuide]:
        return self._guide

    @property
    def error(self) -> Optional[StudyGuideError]:
        return self._error

    @property
    def error_message(self) -> Optional[str]:
        return self._error.user_message if self._error else None

    @property
    def is_busy(self) -> bool:
        return self._state in BUSY_STATES

    def _clear(self) -> None:
        self._file_name: Optional[str] = None
        self._language: Optional[StudyLanguage] = None
        self._guide: Optional[StudyGuide] = None
        self._error: Optional[StudyGuideError] = None
        self._source_language: Optional[str] = None

    def _transition(self, state: GuideState) -> None:
        LOGGER.debug("Session %s: %s -> %s", self.session_id, self._state.value, state.value)
        self._state = state
        self.history.append(state)

    def _fail(self, error: StudyGuideError) -> SessionSnapshot:
        if isinstance(error, (InvalidFileTypeError, EmptyContentError)):
            LOGGER.warning("Session %s rejected %s: %s", self.session_id, self._file_name, error)
        else:
            LOGGER.error(
                "Session %s failed while %s: %s",
                self.session_id,
                self._state.value,
                error,
                exc_info=(type(error), error, error.__traceback__),
            )
        AUDIT_LOGGER.info(
            {
                "event": "guide.failed",
                "session_id": self.session_id,
                "file_name": self._file_name,
                "stage": self._state.value,
                "error": type(error).__name__,
            }
        )
        self._error = error
        self._guide = None
        self._transition(GuideState.ERROR)
        return self.snapshot()

    async def process(
        self,
        document: SourceDocument,
        language: StudyLanguage | str = StudyLanguage.ENGLISH,
    ) -> SessionSnapshot:
        """Extract ``document``, generate its guide and store it.

        Returns the final snapshot, whose state is either ``done`` or ``error``.
        """

        if self.is_busy:
            raise SessionBusyError(f"Session {self.session_id} is already {self._state.value}")

        language = StudyLanguage.parse(language)
        self._clear()
        self.history = [self._state]
        self._file_name = document.file_name
        self._language = language

        try:
            document_format = self.pipeline.detect_format(document)
        except InvalidFileTypeError as error:
            return self._fail(error)

        self._transition(GuideState.READING)
        try:
            extracted = await asyncio.to_thread(self.pipeline.extract, document, document_format)
            if extracted.is_blank():
                raise EmptyContentError()
        except StudyGuideError as error:
            return self._fail(error)
        except Exception as error:
            return self._fail(ExtractionError(document.file_name, document_format.value, cause=error))
        self._source_language = extracted.source_language

        self._transition(GuideState.GENERATING)
        try:
            requester = self._requester_factory()
            result = await asyncio.to_thread(requester.generate, extracted.text, language)
        except StudyGuideError as error:
            return self._fail(error)
        except Exception as error:
            return self._fail(ServiceError(str(error) or type(error).__name__, cause=error))

        self._guide = StudyGuide(
            markdown=result.markdown,
            file_name=document.file_name,
            language=language,
            truncated=result.truncated,
        )
        self._transition(GuideState.DONE)
        AUDIT_LOGGER.info(
            {
                "event": "guide.generated",
                "session_id": self.session_id,
                "file_name": document.file_name,
                "format": document_format.value,
                "language": language.value,
                "source_language": extracted.source_language,
                "input_chars": result.original_length,
                "sent_chars": result.sent_length,
                "truncated": result.truncated,
                "fallback": result.fallback,
                "duration_ms": round(result.duration_seconds * 1000.0, 1),
            }
        )
        return self.snapshot()

    def reset(self) -> SessionSnapshot:
        """Return to ``idle`` and discard the file name, guide and error."""

        if self.is_busy:
            raise SessionBusyError(f"Session {self.session_id} cannot be reset while {self._state.value}")
        self._clear()
        self._state = GuideState.IDLE
        self.history = [GuideState.IDLE]
        return self.snapshot()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            state=self._state,
            file_name=self._file_name,
            language=self._language,
            error_message=self.error_message,
            truncated=self._guide.truncated if self._guide else False,
            source_language=self._source_language,
            guide=self._guide.markdown if self._guide else None,
        )

    def _render(self, renderer: GuideRenderer) -> RenderedArtifact:
        if self._state is not GuideState.DONE or self._guide is None:
            raise GuideNotReadyError(f"Session {self.session_id} has no study guide yet")
        return renderer.render(self.title, self._guide.file_name, self._guide.markdown)

    def render_docx(self) -> RenderedArtifact:
        return self._render(self.docx_renderer)

    def render_pdf(self) -> RenderedArtifact:
        return self._render(self.pdf_renderer)

    def render_preview(self) -> RenderedArtifact:
        return self._render(self.preview_renderer)
