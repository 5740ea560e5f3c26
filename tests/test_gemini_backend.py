"""Tests for the Gemini backend using a fake SDK client."""
from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from studyguide.config import Settings
from studyguide.errors import ConfigurationError
from studyguide.llm import GeminiBackend, MockGenerationBackend, create_backend


class _FakeModels:
    def __init__(self, text: str | None) -> None:
        self.text = text
        self.calls: List[Dict[str, Any]] = []

    def generate_content(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        return SimpleNamespace(text=self.text)


def _fake_client(text: str | None = "## Chapter 1: Cells") -> SimpleNamespace:
    return SimpleNamespace(models=_FakeModels(text))


def test_missing_api_key_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        GeminiBackend(None, "gemini-2.5-flash")


def test_request_carries_both_parts_and_search_tool() -> None:
    client = _fake_client()
    backend = GeminiBackend(None, "gemini-test", client=client)

    answer = backend.generate("INSTRUCTION", "CONTENT")

    assert answer == "## Chapter 1: Cells"
    call = client.models.calls[0]
    assert call["model"] == "gemini-test"
    parts = call["contents"][0].parts
    assert [part.text for part in parts] == ["INSTRUCTION", "CONTENT"]
    tools = call["config"].tools
    assert len(tools) == 1
    assert tools[0].google_search is not None


def test_search_tool_is_omitted_when_disabled() -> None:
    client = _fake_client()

    GeminiBackend(None, "gemini-test", client=client).generate("I", "C", enable_search=False)

    assert client.models.calls[0]["config"] is None


def test_missing_text_becomes_empty_string() -> None:
    backend = GeminiBackend(None, "gemini-test", client=_fake_client(text=None))

    assert backend.generate("I", "C") == ""


def test_create_backend_selects_mock() -> None:
    assert isinstance(create_backend(Settings(backend="mock")), MockGenerationBackend)


def test_create_backend_without_key_fails_before_network() -> None:
    with pytest.raises(ConfigurationError):
        create_backend(Settings(backend="gemini", api_key=None))


def test_create_backend_rejects_unknown_name() -> None:
    with pytest.raises(ConfigurationError, match="Unknown generation backend"):
        create_backend(Settings(backend="other"))
