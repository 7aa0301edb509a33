# tests/unit/config/test_settings.py - v1
"""Tests for config/settings.py."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from jurados.config.settings import ConfigurationError, Settings, load_settings


class TestDefaults:
    def test_default_backends(self):
        s = Settings(_env_file=None)
        assert s.record_store_backend == "memory"
        assert s.preferences_backend == "json"
        assert s.record_store_user == "local-user"

    def test_default_profile_thresholds(self):
        s = Settings(_env_file=None)
        assert s.profile_bio_min_length == 90
        assert s.profile_bio_max_length == 150
        assert s.avatar_jpeg_quality == 80

    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_format == "json"
        assert s.log_rotation == "10MB"


class TestEnvironment:
    def test_reads_env_vars(self, monkeypatch):
        monkeypatch.setenv("RECORD_STORE_BACKEND", "arangodb")
        monkeypatch.setenv("ARANGODB_URL", "http://arango:8529")
        monkeypatch.setenv("PREFERENCES_ROOT", "/tmp/prefs")
        s = Settings(_env_file=None)
        assert s.record_store_backend == "arangodb"
        assert s.arangodb_url == "http://arango:8529"
        assert s.preferences_root == Path("/tmp/prefs")

    def test_unknown_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("PREFERENCES_BACKEND", "etcd")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestValidators:
    @pytest.mark.parametrize("quality", [0, 96])
    def test_jpeg_quality_out_of_range(self, quality):
        with pytest.raises(ValidationError, match="avatar_jpeg_quality"):
            Settings(_env_file=None, avatar_jpeg_quality=quality)

    def test_negative_bio_length(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, profile_bio_min_length=-1)

    def test_bio_min_above_max(self):
        with pytest.raises(ConfigurationError, match="PROFILE_BIO_MIN_LENGTH"):
            Settings(_env_file=None, profile_bio_min_length=200, profile_bio_max_length=150)

    def test_arangodb_requires_url(self):
        with pytest.raises(ConfigurationError, match="ARANGODB_URL"):
            Settings(_env_file=None, record_store_backend="arangodb", arangodb_url="")

    def test_empty_user_rejected(self):
        with pytest.raises(ConfigurationError, match="RECORD_STORE_USER"):
            Settings(_env_file=None, record_store_user="   ")

    def test_errors_are_joined(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(
                _env_file=None,
                record_store_user="",
                profile_bio_min_length=200,
            )
        assert ";" in str(exc_info.value)


class TestLoadSettings:
    def test_overrides(self):
        s = load_settings(_env_file=None, log_level="DEBUG", preferences_backend="sqlite")
        assert s.log_level == "DEBUG"
        assert s.preferences_backend == "sqlite"
