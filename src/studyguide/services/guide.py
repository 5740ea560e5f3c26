from __future__ import annotations

import logging
from collections import OrderedDict
from functools import lru_cache
from typing import Optional

from studyguide.config import Settings, get_settings
from studyguide.errors import ConfigurationError
from studyguide.ingest import ExtractionPipeline, ExtractionPipelineConfig
from studyguide.llm import GenerationBackend, create_backend
from studyguide.orchestrator import GuideSession
from studyguide.preferences import JSONFileStore, LogoPreferences
from studyguide.render import DocxRenderer, MarkdownPreviewRenderer, PdfRenderer
from studyguide.requester import GuideRequester

LOGGER = logging.getLogger(__name__)


class GuideService:
    """High level wiring for study guide sessions.

    Extractors and renderers are shared by every session. The generation
    backend is built on first use so that a missing API key surfaces as a
    session error instead of preventing the service from starting.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        pipeline: Optional[ExtractionPipeline] = None,
        backend: Optional[GenerationBackend] = None,
        preferences: Optional[LogoPreferences] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.pipeline = pipeline or ExtractionPipeline(
            ExtractionPipelineConfig(normalize_whitespace=self.settings.normalize_whitespace)
        )
        self._backend = backend
        self._requester: Optional[GuideRequester] = None
        self.preferences = preferences or LogoPreferences(JSONFileStore(self.settings.preferences_path))
        self.docx_renderer = DocxRenderer()
        self.pdf_renderer = PdfRenderer()
        self.preview_renderer = MarkdownPreviewRenderer()
        self._sessions: "OrderedDict[str, GuideSession]" = OrderedDict()

    def get_requester(self) -> GuideRequester:
        if self._requester is None:
            backend = self._backend or create_backend(self.settings)
            self._requester = GuideRequester(
                backend,
                max_input_chars=self.settings.max_input_chars,
                enable_search=self.settings.enable_search,
            )
            LOGGER.info(
                "Guide requester ready (backend=%s, cap=%s chars)", backend.name, self.settings.max_input_chars
            )
        return self._requester

    def backend_status(self) -> tuple[bool, Optional[str]]:
        """Return whether the generation backend can be built, with the reason if not."""

        try:
            self.get_requester()
        except (ConfigurationError, ValueError) as exc:
            return False, str(exc)
        return True, None

    def find_session(self, session_id: str) -> Optional[GuideSession]:
        """Return an existing session without creating one."""

        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def session(self, session_id: str) -> GuideSession:
        """Return the session for an upload, creating it when needed."""

        session = self.find_session(session_id)
        if session is None:
            session = GuideSession(
                self.pipeline,
                self.get_requester,
                session_id=session_id,
                title=self.settings.guide_title,
                docx_renderer=self.docx_renderer,
                pdf_renderer=self.pdf_renderer,
                preview_renderer=self.preview_renderer,
            )
            self._sessions[session_id] = session
            self._evict()
        return session

    def discard(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    def _evict(self) -> None:
        """Drop least recently used sessions beyond ``max_sessions``.

        The newest session and sessions still reading or generating are never
        dropped.
        """

        excess = len(self._sessions) - self.settings.max_sessions
        for session_id in list(self._sessions)[:-1]:
            if excess <= 0:
                break
            if self._sessions[session_id].is_busy:
                continue
            del self._sessions[session_id]
            excess -= 1
            LOGGER.info("Evicted idle session %s", session_id)


@lru_cache(maxsize=1)
def get_guide_service() -> GuideService:
    """FastAPI dependency returning the shared :class:`GuideService` instance."""

    return GuideService()
