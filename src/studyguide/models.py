"""Value objects shared by the requester, the renderers and the API."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StudyLanguage(str, Enum):
    """Languages a study guide can be written in."""

    ENGLISH = "English"
    FRENCH = "French"

    @classmethod
    def parse(cls, value: "str | StudyLanguage | None") -> "StudyLanguage":
        if isinstance(value, cls):
            return value
        if not value:
            return cls.ENGLISH
        normalized = value.strip().lower()
        for language in cls:
            if normalized in {language.value.lower(), language.value.lower()[:2]}:
                return language
        raise ValueError(f"Unsupported language: {value}")


@dataclass(frozen=True, slots=True)
class StudyGuide:
    """The Markdown guide returned by the generation service."""

    markdown: str
    file_name: str
    language: StudyLanguage
    truncated: bool = False


@dataclass(frozen=True, slots=True)
class RenderedArtifact:
    """Output of a renderer: document bytes or preview markup."""

    content: bytes
    media_type: str
    file_name: Optional[str] = None

    def text(self, encoding: str = "utf-8") -> str:
        return self.content.decode(encoding)
