"""Tests for settings loading and logging setup."""

from __future__ import annotations

import logging

import pydantic
import pytest
import structlog

from cuiro.config import DEFAULT_ANAF_URL, AnafSettings, Settings
from cuiro.observability import configure_logging


class TestAnafSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "ANAF_ENABLED",
            "ANAF_BASE_URL",
            "ANAF_TIMEOUT",
            "ANAF_MAX_RETRIES",
            "ANAF_MAX_BATCH_SIZE",
        ):
            monkeypatch.delenv(name, raising=False)

        anaf = AnafSettings(_env_file=None)

        assert anaf.anaf_enabled is True
        assert anaf.anaf_base_url == DEFAULT_ANAF_URL
        assert anaf.anaf_timeout == 10.0
        assert anaf.anaf_max_retries == 2
        assert anaf.anaf_max_batch_size == 500

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANAF_ENABLED", "false")
        monkeypatch.setenv("ANAF_MAX_RETRIES", "5")
        monkeypatch.setenv("ANAF_TIMEOUT", "2.5")

        anaf = AnafSettings(_env_file=None)

        assert anaf.anaf_enabled is False
        assert anaf.anaf_max_retries == 5
        assert anaf.anaf_timeout == 2.5

    def test_negative_retries_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            AnafSettings(_env_file=None, anaf_max_retries=-1)

    def test_zero_batch_size_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            AnafSettings(_env_file=None, anaf_max_batch_size=0)


class TestSettings:
    def test_log_level_uppercased(self) -> None:
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(pydantic.ValidationError, match="Invalid log level"):
            Settings(_env_file=None, log_level="chatty")


class TestConfigureLogging:
    def test_configures_structlog(self) -> None:
        configure_logging("warning")
        assert structlog.is_configured()
        structlog.reset_defaults()

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging("chatty")

    def test_exported_from_package(self) -> None:
        import cuiro

        assert cuiro.configure_logging is configure_logging
        assert "configure_logging" in cuiro.__all__

    def test_module_loggers_are_stdlib(self) -> None:
        from cuiro.integrations.anaf import client

        assert isinstance(client.logger, logging.Logger)
        assert client.logger.name == "cuiro.integrations.anaf.client"
