"""Persisted user preferences (currently the application logo)."""
from __future__ import annotations

import base64
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

LOGGER = logging.getLogger(__name__)

LOGO_KEY = "app_logo"
DEFAULT_LOGO = (
    "data:image/svg+xml;base64,"
    + base64.b64encode(
        b'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
        b'<path d="M4 19.5A2.5 2.5 0 0 1 6.5 17H20V2H6.5A2.5 2.5 0 0 0 4 4.5z"/></svg>'
    ).decode("ascii")
)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class JSONFileStore:
    """Key-value store kept in a single JSON document on disk.

    Writes go to a temporary file that then replaces the original, so readers
    never observe a half-written document.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Preferences file {self.path} does not contain an object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except (OSError, ValueError):
            LOGGER.warning("Preferences file %s is unreadable; starting from an empty document", self.path)
            data = {}
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".prefs-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def to_data_uri(content: bytes, media_type: str) -> str:
    return f"data:{media_type};base64,{base64.b64encode(content).decode('ascii')}"


class LogoPreferences:
    """Read and write the logo data URI through an injected store."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def get_logo(self) -> Optional[str]:
        """Return the stored logo, or ``None`` when absent or unreadable."""

        try:
            return self.store.get(LOGO_KEY)
        except (OSError, ValueError) as error:
            LOGGER.warning("Failed to read logo preference: %s", error)
            return None

    def logo_or_default(self) -> str:
        return self.get_logo() or DEFAULT_LOGO

    def set_logo(self, content: bytes, media_type: str) -> str:
        if not media_type.startswith("image/"):
            raise ValueError(f"Logo must be an image, got {media_type}")
        data_uri = to_data_uri(content, media_type)
        self.store.set(LOGO_KEY, data_uri)
        LOGGER.info("Stored new logo (%s, %s bytes)", media_type, len(content))
        return data_uri
