# src/logging/logger.py - v1
"""Log formatters and the one-call ``setup_logging`` used by the CLI and app.

Every line carries the session and operation context from
``jurados.logging.context``: JSON lines as top-level keys, text lines as
short markers after the logger name.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from jurados.logging.context import LogContext, get_context

ROOT_LOGGER = "jurados"

# Chatty client libraries (python-arango's HTTP session, Pillow decoders).
_QUIET_LOGGERS = ("urllib3", "PIL")

# Text marker per context field, in display order.
_TEXT_MARKERS = (
    ("operation", "[{}]"),
    ("profile_id", "(profile={})"),
    ("location_id", "(location={})"),
)


def _timestamp() -> datetime:
    return datetime.now(timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per line; context fields are merged at top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": _timestamp().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **get_context().as_dict(),
        }
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data
        if record.exc_info and record.exc_info[1] is not None:
            entry["error_type"] = type(record.exc_info[1]).__name__
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line format for terminals: time, level, logger, markers, message."""

    def format(self, record: logging.LogRecord) -> str:
        line = " ".join([
            _timestamp().strftime("%Y-%m-%d %H:%M:%S"),
            f"[{record.levelname:8s}]",
            record.name,
            *self._markers(get_context()),
            f"- {record.getMessage()}",
        ])
        if record.exc_info and record.exc_info[1] is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    @staticmethod
    def _markers(ctx: LogContext) -> list[str]:
        markers: list[str] = []
        for field, template in _TEXT_MARKERS:
            value = getattr(ctx, field)
            if value:
                markers.append(template.format(value))
        return markers


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``jurados`` namespace (``get_logger("presence")``)."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> logging.Logger:
    """Attach a stdout handler, and optionally a rotating file handler, to the
    ``jurados`` logger. Safe to call more than once: previous handlers are
    replaced.

    Args:
        level: DEBUG, INFO, WARNING or ERROR. Unknown names fall back to INFO.
        log_format: "json" or "text".
        log_file: Log file path, or None for stdout only.
        rotation: Size that triggers rotation (e.g. "10MB").
        retention: Rotated files kept next to the active one.

    Returns:
        The configured ``jurados`` logger.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    formatter = JsonFormatter() if log_format == "json" else TextFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        from jurados.logging.handlers import create_rotating_handler

        handlers.append(
            create_rotating_handler(log_file, rotation=rotation, retention=retention)
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return root
