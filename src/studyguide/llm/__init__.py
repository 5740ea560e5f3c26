"""Generation backends used by the guide requester."""
from __future__ import annotations

import logging

from ..config import Settings
from ..errors import ConfigurationError
from .base import GenerationBackend
from .gemini import GeminiBackend
from .mock import MockGenerationBackend

LOGGER = logging.getLogger(__name__)

__all__ = ["GenerationBackend", "GeminiBackend", "MockGenerationBackend", "create_backend"]


def create_backend(settings: Settings) -> GenerationBackend:
    """Build the backend named by ``settings.backend``.

    Raises :class:`ConfigurationError` before any network activity when the
    backend is unknown or its credentials are missing.
    """

    if settings.backend == "mock":
        LOGGER.info("Using mock generation backend")
        return MockGenerationBackend()
    if settings.backend == "gemini":
        return GeminiBackend(settings.api_key, settings.model)
    raise ConfigurationError(f"Unknown generation backend: {settings.backend}")
