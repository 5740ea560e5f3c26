"""Base interface for text generation backends."""

from __future__ import annotations

from abc import ABC, abstractmethod

__all__ = ["GenerationBackend"]


class GenerationBackend(ABC):
    """Common contract for services that turn an instruction and content into text."""

    name: str = "backend"

    @abstractmethod
    def generate(self, instruction: str, content: str, *, enable_search: bool = True) -> str:
        """Send one non-streaming request and return the response text.

        An empty string means the service answered without any text.
        """
