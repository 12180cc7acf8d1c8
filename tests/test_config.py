"""Tests for settings and logging setup."""

import pytest
from loguru import logger

from callbuilder.config import load_settings
from callbuilder.logging_utils import configure_logging, parse_log_filter


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CALLBUILDER_STRICT", raising=False)
        monkeypatch.delenv("CALLBUILDER_LOG_FILTER", raising=False)
        settings = load_settings()
        assert settings.log_filter == "info"
        assert settings.strict is False
        assert settings.render_failures is True

    def test_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CALLBUILDER_STRICT", "1")
        monkeypatch.setenv("CALLBUILDER_LOG_FILTER", "debug")
        settings = load_settings()
        assert settings.strict is True
        assert settings.log_filter == "debug"

    def test_overrides_win_and_none_is_ignored(
        self,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("CALLBUILDER_LOG_FILTER", "debug")
        settings = load_settings(log_filter="warning", strict=None)
        assert settings.log_filter == "warning"
        assert settings.strict is False


class TestLogFilter:
    def test_global_level(self) -> None:
        assert parse_log_filter("debug") == ("debug", {"": "DEBUG"})

    def test_module_levels(self) -> None:
        level, modules = parse_log_filter(
            "info, callbuilder.unification=debug, callbuilder.fields=false",
        )
        assert level == "info"
        assert modules == {
            "callbuilder.unification": "DEBUG",
            "callbuilder.fields": False,
            "": "INFO",
        }

    def test_configure_logging_enables_library_logs(
        self,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        configure_logging(load_settings(log_filter="debug"))
        logger.warning("test.message")
        assert "test.message" in capsys.readouterr().err

    def test_unknown_level_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown log level 'verbose'"):
            parse_log_filter("verbose")
        with pytest.raises(ValueError, match="unknown log level 'loud'"):
            parse_log_filter("info,callbuilder.fields=loud")
