"""Turns extracted course text into a study guide through a generation backend."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from .config import DEFAULT_MAX_INPUT_CHARS
from .llm import GenerationBackend
from .models import StudyLanguage
from .prompt_builder import build_content, build_instruction

LOGGER = logging.getLogger(__name__)

FALLBACK_RESPONSE = "Failed to generate content."


@dataclass(frozen=True, slots=True)
class GuideResult:
    """Structured result returned from :meth:`GuideRequester.generate`."""

    markdown: str
    language: StudyLanguage
    original_length: int
    sent_length: int
    duration_seconds: float
    fallback: bool = False

    @property
    def truncated(self) -> bool:
        return self.sent_length < self.original_length


class GuideRequester:
    """Sends one capped request per document and returns the guide verbatim."""

    def __init__(
        self,
        backend: GenerationBackend,
        *,
        max_input_chars: int = DEFAULT_MAX_INPUT_CHARS,
        enable_search: bool = True,
    ) -> None:
        if max_input_chars <= 0:
            raise ValueError("max_input_chars must be a positive integer")
        self.backend = backend
        self.max_input_chars = max_input_chars
        self.enable_search = enable_search

    def truncate(self, text: str) -> str:
        return text[: self.max_input_chars]

    def generate(self, text: str, language: StudyLanguage | str = StudyLanguage.ENGLISH) -> GuideResult:
        """Generate a guide for ``text`` written exclusively in ``language``.

        Text longer than ``max_input_chars`` is cut to exactly that length and
        the result reports it through :attr:`GuideResult.truncated`. Backend
        errors are not caught here.
        """

        language = StudyLanguage.parse(language)
        capped = self.truncate(text)
        if len(capped) < len(text):
            LOGGER.warning(
                "Course text truncated from %s to %s characters before generation",
                len(text),
                len(capped),
            )

        started = time.perf_counter()
        response = self.backend.generate(
            build_instruction(language),
            build_content(capped),
            enable_search=self.enable_search,
        )
        duration = time.perf_counter() - started

        fallback = not (response and response.strip())
        if fallback:
            LOGGER.warning("Backend %s returned no text; using fallback response", self.backend.name)

        return GuideResult(
            markdown=FALLBACK_RESPONSE if fallback else response,
            language=language,
            original_length=len(text),
            sent_length=len(capped),
            duration_seconds=duration,
            fallback=fallback,
        )
