"""Tests for settings and logging configuration."""

import logging

import pytest
from pydantic import ValidationError

from rangeQuery import config as app_config
from rangeQuery.config import REFERENCE_VALUES
from rangeQuery.config import DemoSettings
from rangeQuery.config import LoggingSettings
from rangeQuery.config import TableSettings
from rangeQuery.config import get_settings
from rangeQuery.operations import Operation


class TestTableSettings:
    def test_defaults(self):
        assert TableSettings().cache_maxsize == 128

    def test_cache_size_must_be_positive(self):
        with pytest.raises(ValidationError, match="greater than or equal to 1"):
            TableSettings(cache_maxsize=0)


class TestDemoSettings:
    def test_defaults_match_reference_example(self):
        demo = DemoSettings()
        assert demo.values == REFERENCE_VALUES
        assert demo.operation is Operation.MIN
        assert (demo.left, demo.right) == (2, 7)

    def test_operation_name_normalized(self):
        assert DemoSettings(operation="MAX").operation is Operation.MAX

    def test_reversed_range_rejected(self):
        with pytest.raises(ValidationError, match="is empty"):
            DemoSettings(left=5, right=1)

    def test_range_beyond_values_rejected(self):
        with pytest.raises(ValidationError, match="exceeds"):
            DemoSettings(values=(1, 2, 3), left=0, right=3)

    def test_empty_values_rejected(self):
        with pytest.raises(ValidationError):
            DemoSettings(values=(), left=0, right=0)


class TestAppSettings:
    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("RANGE_QUERY_DEMO__OPERATION", "max")
        monkeypatch.setenv("RANGE_QUERY_TABLE__CACHE_MAXSIZE", "16")
        get_settings.cache_clear()

        settings = get_settings()

        assert settings.demo.operation is Operation.MAX
        assert settings.table.cache_maxsize == 16

    def test_conftest_disables_log_outputs(self):
        settings = get_settings()
        assert settings.logging.file_enabled is False
        assert settings.logging.console_enabled is False

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()


class TestConfigureLogging:
    @pytest.fixture()
    def fresh_logging(self, monkeypatch):
        """Let configure_logging run again and restore root handlers afterwards."""
        monkeypatch.setattr(app_config, "_LOGGING_CONFIGURED", False)
        monkeypatch.setattr(app_config, "_ACTIVE_LOGGING_SETTINGS", None)
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)
        logging.getLogger("rangeQuery").setLevel(logging.NOTSET)

    def test_rotating_file_handler(self, fresh_logging, tmp_path):
        log_settings = LoggingSettings(
            log_dir=tmp_path / "logs", console_enabled=False, loggers={"rangeQuery": "DEBUG"}
        )

        applied = app_config.configure_logging(log_settings)

        assert applied is log_settings
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert (tmp_path / "logs").is_dir()
        assert logging.getLogger("rangeQuery").level == logging.DEBUG

    def test_idempotent(self, fresh_logging, tmp_path):
        first = LoggingSettings(file_enabled=False, console_enabled=False)
        second = LoggingSettings(log_dir=tmp_path, console_enabled=False)

        app_config.configure_logging(first)

        assert app_config.configure_logging(second) is first
        assert not any(tmp_path.iterdir())
