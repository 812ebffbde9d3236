"""Unit tests for environment settings."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from ether.settings import EtherSettings, get_settings


class TestEtherSettings:
    """Tests for EtherSettings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test defaults when no ETHER_* variables are set."""
        monkeypatch.chdir(tmp_path)
        for name in ("LOG_REQUESTS", "TIMEOUT_SECONDS", "USER_AGENT", "LOG_LEVEL", "JSON_LOGS"):
            monkeypatch.delenv(f"ETHER_{name}", raising=False)

        settings = EtherSettings()

        assert settings.log_requests is False
        assert settings.timeout_seconds is None
        assert settings.user_agent is None
        assert settings.log_level == "INFO"
        assert settings.json_logs is True

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test values come from ETHER_-prefixed variables."""
        monkeypatch.setenv("ETHER_LOG_REQUESTS", "true")
        monkeypatch.setenv("ETHER_TIMEOUT_SECONDS", "12.5")
        monkeypatch.setenv("ETHER_USER_AGENT", "my-app/1.0")
        monkeypatch.setenv("ETHER_LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.log_requests is True
        assert settings.timeout_seconds == 12.5
        assert settings.user_agent == "my-app/1.0"
        assert settings.log_level == "DEBUG"
        assert settings.log_level_number == logging.DEBUG

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unknown log levels are rejected."""
        monkeypatch.setenv("ETHER_LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            EtherSettings()

    def test_invalid_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test non-positive timeouts are rejected."""
        monkeypatch.setenv("ETHER_TIMEOUT_SECONDS", "0")

        with pytest.raises(ValidationError):
            EtherSettings()
