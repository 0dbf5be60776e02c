"""Tests for config and logging."""

import json
import logging
import sys
from pathlib import Path

import pytest

from rentals.config import (
    DEFAULT_CATALOG_PATH,
    CatalogConfig,
    DashboardConfig,
    RentalsConfig,
    StoreConfig,
)
from rentals.exceptions import ConfigurationError
from rentals.logging import JsonFormatter, setup_logging

ENV_VARS = [
    "RENTALS_STORE_PATH",
    "RENTALS_COLLECTION",
    "RENTALS_CATALOG_PATH",
    "TREND_DAYS",
    "RECENT_LIMIT",
    "GUARD_TRANSITIONS",
    "SEED",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestStoreConfig:
    def test_default_values(self) -> None:
        config = StoreConfig()

        assert config.path == Path("rentals-store.json")
        assert config.collection == "applications"


class TestCatalogConfig:
    def test_default_points_at_bundled_catalog(self) -> None:
        assert CatalogConfig().path == DEFAULT_CATALOG_PATH
        assert DEFAULT_CATALOG_PATH.name == "properties.json"


class TestDashboardConfig:
    def test_default_values(self) -> None:
        config = DashboardConfig()

        assert config.trend_days == 14
        assert config.week_days == 7
        assert config.month_days == 30
        assert config.recent_limit == 10
        assert config.guard_transitions is True

    def test_rejects_non_positive_trend_days(self) -> None:
        with pytest.raises(ConfigurationError, match="trend_days"):
            DashboardConfig(trend_days=0)

    def test_rejects_non_positive_recent_limit(self) -> None:
        with pytest.raises(ConfigurationError, match="recent_limit"):
            DashboardConfig(recent_limit=0)


class TestRentalsConfig:
    def test_default_values(self) -> None:
        config = RentalsConfig()

        assert isinstance(config.store, StoreConfig)
        assert isinstance(config.catalog, CatalogConfig)
        assert isinstance(config.dashboard, DashboardConfig)
        assert config.seed is None
        assert config.log_level == "INFO"
        assert config.log_format == "standard"

    def test_from_env_default(self, clean_env: pytest.MonkeyPatch) -> None:
        config = RentalsConfig.from_env()

        assert config.store.path == Path("rentals-store.json")
        assert config.store.collection == "applications"
        assert config.catalog.path == DEFAULT_CATALOG_PATH
        assert config.dashboard.trend_days == 14
        assert config.dashboard.guard_transitions is True
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_from_env_custom(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("RENTALS_STORE_PATH", "/data/store.json")
        clean_env.setenv("RENTALS_COLLECTION", "rental_applications")
        clean_env.setenv("RENTALS_CATALOG_PATH", "/data/properties.json")
        clean_env.setenv("TREND_DAYS", "7")
        clean_env.setenv("RECENT_LIMIT", "25")
        clean_env.setenv("GUARD_TRANSITIONS", "false")
        clean_env.setenv("SEED", "12345")
        clean_env.setenv("LOG_LEVEL", "DEBUG")
        clean_env.setenv("LOG_FORMAT", "json")

        config = RentalsConfig.from_env()

        assert config.store.path == Path("/data/store.json")
        assert config.store.collection == "rental_applications"
        assert config.catalog.path == Path("/data/properties.json")
        assert config.dashboard.trend_days == 7
        assert config.dashboard.recent_limit == 25
        assert config.dashboard.guard_transitions is False
        assert config.seed == 12345
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_from_env_invalid_int(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("TREND_DAYS", "two weeks")

        with pytest.raises(ConfigurationError, match="TREND_DAYS"):
            RentalsConfig.from_env()


class TestSetupLogging:
    def test_setup_logging_default(self) -> None:
        setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("rentals").level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        """Test logging with invalid level defaults to INFO."""
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        setup_logging(format_type="json")

        logger = logging.getLogger()
        assert any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        logger = logging.getLogger()
        logger.addHandler(logging.StreamHandler())
        logger.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(logger.handlers) == 1

    def test_external_loggers_quieted(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    def _record(self, **kwargs) -> logging.LogRecord:
        defaults = dict(
            name="test.logger",
            level=logging.INFO,
            pathname="/path/to/file.py",
            lineno=42,
            msg="Test message",
            args=(),
            exc_info=None,
        )
        defaults.update(kwargs)
        return logging.LogRecord(**defaults)

    def test_format_basic(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test.logger"
        assert data["message"] == "Test message"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = self._record(level=logging.ERROR, msg="Error occurred", exc_info=exc_info)
        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "ERROR"
        assert "ValueError" in data["exception"]

    def test_format_with_extra(self) -> None:
        record = self._record()
        record.extra = {"application_id": "app-001"}

        data = json.loads(JsonFormatter().format(record))

        assert data["application_id"] == "app-001"

    def test_context_fields_lifted(self) -> None:
        record = self._record()
        record.error_code = "unavailable"
        record.collection = "applications"

        data = json.loads(JsonFormatter().format(record))

        assert data["error_code"] == "unavailable"
        assert data["collection"] == "applications"
        assert "application_id" not in data


class TestRentalsInit:
    def test_version_exported(self) -> None:
        from rentals import __version__

        assert isinstance(__version__, str)
