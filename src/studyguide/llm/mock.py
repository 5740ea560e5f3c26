"""Deterministic generation backend for tests and offline development."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .base import GenerationBackend

DEFAULT_MOCK_GUIDE = """## Chapter 1: Overview

**Q: What is this course about?**
A: It introduces the core ideas of the uploaded material and explains why they matter.

### Exercises

**Exercise 1:** Compute $2 + 2$.

$$E = mc^2$$
"""


@dataclass(slots=True)
class RecordedCall:
    instruction: str
    content: str
    enable_search: bool


@dataclass
class MockGenerationBackend(GenerationBackend):
    """Return a canned guide and remember every request it received."""

    response: Optional[str] = DEFAULT_MOCK_GUIDE
    calls: List[RecordedCall] = field(default_factory=list)
    name: str = "mock"

    def generate(self, instruction: str, content: str, *, enable_search: bool = True) -> str:
        self.calls.append(RecordedCall(instruction=instruction, content=content, enable_search=enable_search))
        return self.response or ""

    @property
    def last_call(self) -> Optional[RecordedCall]:
        return self.calls[-1] if self.calls else None
