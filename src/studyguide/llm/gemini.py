"""Google Gemini backend built on the ``google-genai`` SDK."""
from __future__ import annotations

import logging
import time
from typing import Any, Optional

from google import genai
from google.genai import types

from ..errors import ConfigurationError
from .base import GenerationBackend

LOGGER = logging.getLogger(__name__)


class GeminiBackend(GenerationBackend):
    """Calls ``models.generate_content`` with optional Google Search grounding."""

    name = "gemini"

    def __init__(self, api_key: Optional[str], model: str, *, client: Any = None) -> None:
        if not api_key and client is None:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        self.model = model
        self._client = client if client is not None else genai.Client(api_key=api_key)

    def generate(self, instruction: str, content: str, *, enable_search: bool = True) -> str:
        config = None
        if enable_search:
            config = types.GenerateContentConfig(
                tools=[types.Tool(google_search=types.GoogleSearch())],
            )
        contents = [
            types.Content(
                role="user",
                parts=[types.Part(text=instruction), types.Part(text=content)],
            )
        ]

        started = time.perf_counter()
        response = self._client.models.generate_content(
            model=self.model,
            contents=contents,
            config=config,
        )
        LOGGER.info(
            "Gemini model %s answered in %.2fs (search=%s)",
            self.model,
            time.perf_counter() - started,
            enable_search,
        )
        return response.text or ""
