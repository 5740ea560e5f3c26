"""Utilities for constructing the study guide request payload."""
from __future__ import annotations

from pathlib import Path

from .models import StudyLanguage

_PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"
_INSTRUCTION_PATH = _PROMPTS_DIR / "study_guide.txt"

CONTENT_HEADER = "\n\nCOURSE CONTENT:\n"


def _load_template(path: Path) -> str:
    """Read and trim the contents of a template file."""
    return path.read_text(encoding="utf-8").strip()


_INSTRUCTION_TEMPLATE = _load_template(_INSTRUCTION_PATH)


def build_instruction(language: StudyLanguage) -> str:
    """Return the fixed tutoring instruction mandating ``language`` as output language."""

    return _INSTRUCTION_TEMPLATE.replace("{language}", StudyLanguage.parse(language).value)


def build_content(text: str) -> str:
    return f"{CONTENT_HEADER}{text}"


__all__ = ["CONTENT_HEADER", "build_content", "build_instruction"]
