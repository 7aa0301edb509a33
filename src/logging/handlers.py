# src/logging/handlers.py - v1
"""Rotating file handler for the app log.

Rotation is size based (``LOG_ROTATION``, e.g. "10MB") and keeps
``LOG_RETENTION`` backups next to the active file.
"""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_PATTERN = re.compile(r"^(\d+)\s*(B|KB|MB|GB)?$", re.IGNORECASE)
_UNITS = {"B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}


def _parse_size(size_str: str) -> int:
    """Parse a size such as '10MB' or '4096' into bytes."""
    match = _SIZE_PATTERN.match(size_str.strip())
    if not match:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    unit = (match.group(2) or "B").upper()
    size = int(match.group(1)) * _UNITS[unit]
    if size <= 0:
        raise ValueError(f"Invalid size format: {size_str!r}. Size must be > 0.")
    return size


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 30,
) -> RotatingFileHandler:
    """Create a size-rotating handler, creating the log directory if needed.

    Raises:
        ValueError: If ``rotation`` cannot be parsed or ``retention`` < 0.
    """
    if retention < 0:
        raise ValueError("retention must be >= 0")

    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    return RotatingFileHandler(
        filename=str(path),
        maxBytes=_parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
    )
