"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for configuration management module.

These tests verify that the configuration module correctly handles environment variables,
validation, and default values.
"""

import logging
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from cindex.core import config as config_module
from cindex.core.config import (
    AppConfig,
    DatabaseConfig,
    IndexConfig,
    LoggingConfig,
    get_app_config,
    init_app_config,
)


@pytest.mark.unit
class TestLoggingConfig:
    """Tests for the logging configuration."""

    def test_defaults(self):
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.use_rich is True
        assert config.json_format is False

    def test_level_validation(self):
        for level in ["DEBUG", "info", "Warning", "ERROR", "CRITICAL"]:
            assert LoggingConfig(level=level).level == level.upper()
        assert LoggingConfig(level="INVALID").level == "INFO"

    def test_get_log_level_int(self):
        assert LoggingConfig(level="DEBUG").get_log_level_int() == logging.DEBUG

    @patch.dict(os.environ, {"CINDEX_LOG_LEVEL": "DEBUG", "CINDEX_LOG_JSON": "true", "CINDEX_LOG_USE_RICH": "false"})
    def test_from_env(self):
        config = LoggingConfig.from_env()
        assert config.level == "DEBUG"
        assert config.json_format is True
        assert config.use_rich is False

    @patch("cindex.core.logging.configure_logging")
    def test_configure_logging_passes_debug(self, mock_configure):
        LoggingConfig(level="WARNING").configure_logging(debug=True)
        kwargs = mock_configure.call_args.kwargs
        assert kwargs["level"] == logging.WARNING
        assert kwargs["debug"] is True


@pytest.mark.unit
class TestDatabaseConfig:
    """Tests for the database configuration."""

    def test_postgresql_connection_string(self):
        config = DatabaseConfig(host="db", username="app", password="secret", database="shop")
        assert config.get_connection_string() == "postgresql://app:secret@db:5432/shop"

    def test_postgresql_requires_fields(self):
        with pytest.raises(ValidationError):
            DatabaseConfig(host="db")

    def test_sqlite_default_path(self):
        config = DatabaseConfig(db_type="sqlite")
        assert config.db_path.endswith("cindex.db")
        assert config.get_connection_string().startswith("sqlite:///")

    def test_unsupported_type(self):
        with pytest.raises(ValidationError):
            DatabaseConfig(db_type="oracle")

    @patch.dict(os.environ, {
        "CINDEX_DB_TYPE": "postgresql",
        "CINDEX_PG_HOST": "pg.internal",
        "CINDEX_PG_PORT": "6543",
        "CINDEX_PG_USER": "indexer",
        "CINDEX_PG_DATABASE": "warehouse",
    })
    def test_from_env(self):
        config = DatabaseConfig.from_env()
        assert config.get_connection_string() == "postgresql://indexer@pg.internal:6543/warehouse"


@pytest.mark.unit
class TestIndexConfig:
    """Tests for the index management configuration."""

    def test_defaults(self):
        config = IndexConfig()
        assert config.dialect == "postgresql"
        assert config.search_in_all_schemas is False

    def test_dialect_is_normalized(self):
        assert IndexConfig(dialect="PostgreSQL").dialect == "postgresql"

    def test_unsupported_dialect(self):
        with pytest.raises(ValidationError):
            IndexConfig(dialect="mysql")

    @patch.dict(os.environ, {"CINDEX_SEARCH_ALL_SCHEMAS": "yes"})
    def test_from_env(self):
        assert IndexConfig.from_env().search_in_all_schemas is True


@pytest.mark.unit
class TestAppConfig:
    """Tests for the aggregated application configuration."""

    @patch.dict(os.environ, {}, clear=True)
    def test_from_env_defaults(self):
        config = AppConfig.from_env()
        assert config.index.dialect == "postgresql"
        assert config.debug is False

    @patch.dict(os.environ, {"CINDEX_DB_TYPE": "postgresql", "CINDEX_PG_PORT": "not-a-port"}, clear=True)
    def test_from_env_ignores_incomplete_database_settings(self):
        config = AppConfig.from_env()
        assert "database" not in config.model_dump()
        with pytest.raises(ValueError):
            DatabaseConfig.from_env()

    @patch.dict(os.environ, {"CINDEX_DIALECT": "mysql"}, clear=True)
    def test_from_env_rejects_unsupported_dialect(self):
        with pytest.raises(ValidationError):
            AppConfig.from_env()

    def test_overrides(self):
        assert AppConfig.from_env(debug=True).debug is True

    def test_global_config(self):
        with patch.object(config_module, "_app_config", None):
            config = init_app_config(debug=True)
            assert get_app_config() is config
