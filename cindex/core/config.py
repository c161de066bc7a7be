"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Configuration management for CIndex.

This module provides a central location for CIndex configuration settings.
It handles environment variables (prefixed ``CINDEX_``), default values, and
validation of configuration parameters.
"""

import logging
import os
from pathlib import Path
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator, model_validator

from cindex.core.logging import get_logger
from cindex.dialects import supported_dialects

logger = get_logger(__name__)


def _env_flag(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig(BaseModel):
    """Base configuration class with common functionality."""

    ENV_PREFIX: ClassVar[str] = "CINDEX_"

    @classmethod
    def from_env(cls, **overrides):
        """
        Create a configuration instance from environment variables.

        Args:
            **overrides: Key-value pairs that override environment variables

        """
        raise NotImplementedError("Subclasses must implement from_env method")

    @classmethod
    def get_env_var(cls, key: str, default: Any = None) -> Any:
        """
        Get an environment variable with the class prefix.

        Args:
            key: Key name without prefix
            default: Default value if environment variable is not found

        Returns:
            The environment variable value or default

        """
        env_key = f"{cls.ENV_PREFIX}{key.upper()}"
        return os.environ.get(env_key, default)


class LoggingConfig(BaseConfig):
    """Configuration for logging settings."""

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    use_rich: bool = Field(
        default=True,
        description="Whether to use rich for logging formatting",
    )
    log_file: str | None = Field(
        default=None,
        description="Path to the log file (None for console-only logging)",
    )
    json_format: bool = Field(
        default=False,
        description="Whether to use JSON format for logs",
    )
    include_correlation_id: bool = Field(
        default=True,
        description="Whether to include correlation IDs in logs",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, value):
        """Validate that the log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        value = value.upper()
        if value not in valid_levels:
            logger.warning(f"Invalid log level '{value}', defaulting to INFO")
            return "INFO"
        return value

    @classmethod
    def from_env(cls, **overrides) -> "LoggingConfig":
        """Create a logging configuration from environment variables."""
        config = {
            "level": cls.get_env_var("LOG_LEVEL", "INFO"),
            "use_rich": _env_flag(cls.get_env_var("LOG_USE_RICH"), default=True),
            "log_file": cls.get_env_var("LOG_FILE", None),
            "json_format": _env_flag(cls.get_env_var("LOG_JSON")),
            "include_correlation_id": _env_flag(cls.get_env_var("LOG_CORRELATION_ID"), default=True),
        }
        config.update(overrides)

        return cls(**config)

    def get_log_level_int(self) -> int:
        """Get the numeric logging level."""
        return getattr(logging, self.level)

    def configure_logging(self, debug: bool = False) -> None:
        """
        Configure logging based on the settings.

        Args:
            debug: Whether to force debug mode

        """
        from cindex.core.logging import configure_logging as configure_contextual_logging

        configure_contextual_logging(
            level=self.get_log_level_int(),
            log_file=self.log_file,
            json_format=self.json_format,
            include_timestamp=True,
            use_rich=self.use_rich,
            include_correlation_id=self.include_correlation_id,
            debug=debug,
        )


class DatabaseConfig(BaseConfig):
    """Configuration for the database CIndex connects to."""

    db_type: str = Field(
        default="postgresql",
        description="Database type (postgresql, sqlite)",
    )
    db_path: str | None = Field(
        default=None,
        description="Path to SQLite database file (for SQLite)",
    )
    host: str | None = Field(
        default=None,
        description="Database host (for PostgreSQL)",
    )
    port: int | None = Field(
        default=None,
        description="Database port (for PostgreSQL)",
    )
    username: str | None = Field(
        default=None,
        description="Database username (for PostgreSQL)",
    )
    password: str | None = Field(
        default=None,
        description="Database password (for PostgreSQL)",
    )
    database: str | None = Field(
        default=None,
        description="Database name (for PostgreSQL)",
    )
    echo: bool = Field(
        default=False,
        description="Whether to echo SQL statements",
    )

    @model_validator(mode="after")
    def validate_db_config(self):
        """Validate database configuration based on the database type."""
        if self.db_type == "sqlite":
            if not self.db_path:
                self.db_path = os.path.join(os.getcwd(), "cindex.db")
        elif self.db_type == "postgresql":
            if not all([self.host, self.username, self.database]):
                raise ValueError("Host, username, and database name are required for PostgreSQL")
        else:
            raise ValueError(f"Unsupported database type: {self.db_type}")

        return self

    @classmethod
    def from_env(cls, **overrides) -> "DatabaseConfig":
        """Create a database configuration from environment variables."""
        db_type = cls.get_env_var("DB_TYPE", "postgresql").lower()

        config: dict[str, Any] = {
            "db_type": db_type,
            "echo": _env_flag(cls.get_env_var("DB_ECHO")),
        }

        if db_type == "sqlite":
            config["db_path"] = cls.get_env_var("DB_PATH")
        elif db_type == "postgresql":
            config.update(
                {
                    "host": cls.get_env_var("PG_HOST"),
                    "port": int(cls.get_env_var("PG_PORT", "5432")),
                    "username": cls.get_env_var("PG_USER"),
                    "password": cls.get_env_var("PG_PASSWORD"),
                    "database": cls.get_env_var("PG_DATABASE"),
                },
            )

        config.update(overrides)

        return cls(**config)

    def get_connection_string(self) -> str:
        """
        Get the database connection string based on the configuration.

        Returns:
            Database connection string for SQLAlchemy

        """
        if self.db_type == "sqlite":
            return f"sqlite:///{Path(self.db_path)}"
        port = self.port or 5432
        password_part = f":{self.password}" if self.password else ""
        return f"postgresql://{self.username}{password_part}@{self.host}:{port}/{self.database}"


class IndexConfig(BaseConfig):
    """Configuration for index management."""

    dialect: str = Field(
        default="postgresql",
        description="SQL dialect used to render index DDL",
    )
    search_in_all_schemas: bool = Field(
        default=False,
        description="Whether index enumeration looks beyond the current schema",
    )

    @field_validator("dialect")
    @classmethod
    def validate_dialect(cls, value):
        """Validate that the dialect is one CIndex can render."""
        value = value.lower()
        if value not in supported_dialects():
            raise ValueError(
                f"Unsupported dialect '{value}', expected one of: {', '.join(supported_dialects())}",
            )
        return value

    @classmethod
    def from_env(cls, **overrides) -> "IndexConfig":
        """Create an index configuration from environment variables."""
        config = {
            "dialect": cls.get_env_var("DIALECT", "postgresql"),
            "search_in_all_schemas": _env_flag(cls.get_env_var("SEARCH_ALL_SCHEMAS")),
        }
        config.update(overrides)

        return cls(**config)


class AppConfig(BaseConfig):
    """
    Main application configuration.

    Database settings are not part of it: only commands that connect load a
    DatabaseConfig, so a partial connection setup does not break the others.
    """

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )
    index: IndexConfig = Field(
        default_factory=IndexConfig,
        description="Index management configuration",
    )
    debug: bool = Field(
        default=False,
        description="Debug mode flag",
    )

    @classmethod
    def from_env(cls, **overrides) -> "AppConfig":
        """Create an application configuration from environment variables."""
        config: dict[str, Any] = {
            "logging": LoggingConfig.from_env(),
            "index": IndexConfig.from_env(),
            "debug": _env_flag(cls.get_env_var("DEBUG")),
        }

        config.update(overrides)

        return cls(**config)

    def configure_logging(self) -> None:
        """Configure logging based on the settings."""
        self.logging.configure_logging(debug=self.debug)


# Global app configuration
_app_config = None


def get_app_config() -> AppConfig:
    """
    Get the global application configuration.

    Returns:
        The application configuration instance

    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig.from_env()
    return _app_config


def init_app_config(config: AppConfig | None = None, **kwargs) -> AppConfig:
    """
    Initialize the global application configuration.

    Args:
        config: An existing AppConfig instance
        **kwargs: Key-value pairs for creating a new AppConfig

    Returns:
        The application configuration instance

    """
    global _app_config
    _app_config = config if config is not None else AppConfig.from_env(**kwargs)
    return _app_config
