"""Runtime settings loaded from environment variables."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_CHARS = 500_000
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TITLE = "Exhaustive Study Guide"
DEFAULT_MAX_SESSIONS = 100


@dataclass(frozen=True, slots=True)
class Settings:
    """Configuration shared by the pipeline, the requester and the API."""

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    backend: str = "gemini"
    max_input_chars: int = DEFAULT_MAX_INPUT_CHARS
    enable_search: bool = True
    guide_title: str = DEFAULT_TITLE
    max_sessions: int = DEFAULT_MAX_SESSIONS
    normalize_whitespace: bool = True
    preferences_path: Path = Path("data") / "preferences.json"
    log_dir: Path = Path("logs")
    log_level: str = "INFO"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _int_from_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        LOGGER.warning("Invalid integer for %s: %s; using default %s", name, value, default)
        return default
    if parsed <= 0:
        LOGGER.warning("Non-positive value for %s: %s; using default %s", name, value, default)
        return default
    return parsed


def _str_from_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def load_settings() -> Settings:
    """Build :class:`Settings` from the current process environment."""

    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or None
    return Settings(
        api_key=api_key.strip() if api_key else None,
        model=_str_from_env("GEMINI_MODEL", DEFAULT_MODEL),
        backend=_str_from_env("GUIDE_BACKEND", "gemini").lower(),
        max_input_chars=_int_from_env("GUIDE_MAX_INPUT_CHARS", DEFAULT_MAX_INPUT_CHARS),
        enable_search=_env_flag("GUIDE_ENABLE_SEARCH", True),
        guide_title=_str_from_env("GUIDE_TITLE", DEFAULT_TITLE),
        max_sessions=_int_from_env("GUIDE_MAX_SESSIONS", DEFAULT_MAX_SESSIONS),
        normalize_whitespace=_env_flag("NORMALIZE_WHITESPACE", True),
        preferences_path=Path(_str_from_env("PREFERENCES_PATH", str(Path("data") / "preferences.json"))),
        log_dir=Path(_str_from_env("LOG_DIR", "logs")),
        log_level=_str_from_env("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""

    return load_settings()
