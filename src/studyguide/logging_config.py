"""JSON logging for the API process and the guide audit trail."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

AUDIT_LOGGER_NAME = "studyguide.audit"
AUDIT_FILE_NAME = "guide_audit.log"

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}


def _utc_timestamp(created: float) -> str:
    return (
        datetime.fromtimestamp(created, tz=timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class MinimalJSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line.

    Dict messages are merged into the object, which is how audit events are
    logged. Fields passed through ``extra`` are copied as they are.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        payload: dict[str, Any] = {
            "ts": _utc_timestamp(record.created),
            "level": record.levelname,
            "module": record.name,
        }

        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            message = record.getMessage()
            if message:
                payload["message"] = message

        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def build_logging_config(log_dir: Path, level: str = "INFO") -> dict[str, Any]:
    """Return the :func:`logging.config.dictConfig` schema used by the service."""

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"json": {"()": MinimalJSONFormatter}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "json",
            },
            "audit_file": {
                "class": "logging.FileHandler",
                "filename": str(log_dir / AUDIT_FILE_NAME),
                "encoding": "utf-8",
                "formatter": "json",
            },
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            AUDIT_LOGGER_NAME: {"level": "INFO", "handlers": ["audit_file"], "propagate": False},
        },
    }


def configure_logging(log_dir: Path | str = "logs", level: str = "INFO") -> None:
    """Send application logs to stderr and audit events to ``<log_dir>/guide_audit.log``."""

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(log_path, level))
