"""Shared pytest fixtures."""
import pytest
from rangeQuery import config as app_config
from rangeQuery.registry import clear_table_cache


@pytest.fixture(autouse=True)
def reset_app_settings(monkeypatch):
    """Ensure tests operate on a fresh settings instance without log files or console output."""
    monkeypatch.setenv("RANGE_QUERY_LOGGING__FILE_ENABLED", "false")
    monkeypatch.setenv("RANGE_QUERY_LOGGING__CONSOLE_ENABLED", "false")
    app_config.get_settings.cache_clear()
    app_config.settings = app_config.get_settings()
    yield
    app_config.get_settings.cache_clear()
    app_config.settings = app_config.get_settings()


@pytest.fixture(autouse=True)
def empty_table_cache():
    """Each test starts without memoised tables."""
    clear_table_cache()
    yield
    clear_table_cache()
