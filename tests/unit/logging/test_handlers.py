# tests/unit/logging/test_handlers.py - v1
"""Tests for logging/handlers.py."""

from __future__ import annotations

import pytest

from jurados.logging.handlers import _parse_size, create_rotating_handler


class TestParseSize:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("10MB", 10 * 1024**2),
            ("512kb", 512 * 1024),
            ("1 GB", 1024**3),
            ("4096", 4096),
            ("100B", 100),
        ],
    )
    def test_valid(self, text, expected):
        assert _parse_size(text) == expected

    @pytest.mark.parametrize("text", ["", "ten MB", "10TB", "0MB", "-5MB"])
    def test_invalid(self, text):
        with pytest.raises(ValueError, match="Invalid size format"):
            _parse_size(text)


class TestCreateRotatingHandler:
    def test_creates_directory(self, tmp_path):
        log_file = tmp_path / "nested" / "app.log"
        handler = create_rotating_handler(log_file, rotation="2MB", retention=3)
        try:
            assert log_file.parent.is_dir()
            assert handler.maxBytes == 2 * 1024**2
            assert handler.backupCount == 3
        finally:
            handler.close()

    def test_negative_retention(self, tmp_path):
        with pytest.raises(ValueError, match="retention"):
            create_rotating_handler(tmp_path / "app.log", retention=-1)
