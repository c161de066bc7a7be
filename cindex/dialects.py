"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Dialect-specific SQL generation for CIndex.

Supported dialects form a closed set (the Dialect enum). Each one maps to an
SqlPlatform that renders CREATE INDEX, DROP INDEX, the current-schema lookup
and the managed-index enumeration query. Asking for any other dialect raises
UnsupportedPlatformError before any SQL is produced.
"""

from enum import Enum

from cindex.core.logging import get_logger
from cindex.definition import IndexDefinition
from cindex.exceptions import UnsupportedPlatformError
from cindex.naming import PREFIX

logger = get_logger(__name__)

# Name of the bound parameter holding the LIKE pattern in index_list_sql
INDEX_PATTERN_PARAM = "pattern"


def index_name_pattern() -> str:
    """Return the LIKE pattern matching every managed index name."""
    return f"{PREFIX}%"


class Dialect(Enum):
    """SQL dialects CIndex can render DDL for."""

    POSTGRESQL = "postgresql"


class SqlPlatform:
    """
    Renders CIndex statements for one database dialect.

    Subclasses implement every method; a platform never returns partial SQL.
    """

    dialect: Dialect

    def create_index_sql(
        self, definition: IndexDefinition, current_schema: str | None = None,
    ) -> str:
        raise NotImplementedError

    def drop_index_sql(self, index_name: str) -> str:
        raise NotImplementedError

    def current_schema_sql(self) -> str:
        raise NotImplementedError

    def index_list_sql(self, search_in_all_schemas: bool = False) -> str:
        raise NotImplementedError


class PostgreSQLPlatform(SqlPlatform):
    """PostgreSQL DDL and catalog queries."""

    dialect = Dialect.POSTGRESQL

    def create_index_sql(
        self, definition: IndexDefinition, current_schema: str | None = None,
    ) -> str:
        """
        Render CREATE INDEX for a definition.

        Args:
            definition: The index definition
            current_schema: The connection's current default schema; the
                table is schema-qualified only when the definition's schema
                differs from it

        Returns:
            ``CREATE [UNIQUE] INDEX name ON table [USING m] (cols) [WHERE p]``

        """
        parts = ["CREATE"]
        if definition.unique:
            parts.append("UNIQUE")
        parts.append(f"INDEX {definition.name}")
        parts.append(f"ON {definition.qualified_table_name(current_schema)}")
        if definition.using:
            parts.append(f"USING {definition.using}")
        parts.append(f"({', '.join(definition.columns)})")

        sql = " ".join(parts)
        if definition.where:
            sql += f" WHERE {definition.where}"
        return sql

    def drop_index_sql(self, index_name: str) -> str:
        return f"DROP INDEX {index_name}"

    def current_schema_sql(self) -> str:
        return "SELECT current_schema() AS current_schema"

    def index_list_sql(self, search_in_all_schemas: bool = False) -> str:
        """
        Render the query listing managed indexes as ``schema.index``.

        The LIKE pattern is left as the ``:pattern`` bind parameter.
        """
        sql = (
            "SELECT schemaname || '.' || indexname AS relname FROM pg_indexes "
            f"WHERE indexname LIKE :{INDEX_PATTERN_PARAM}"
        )
        if not search_in_all_schemas:
            sql += " AND schemaname = current_schema()"
        return sql


_PLATFORMS: dict[Dialect, SqlPlatform] = {
    Dialect.POSTGRESQL: PostgreSQLPlatform(),
}


def get_platform(dialect: Dialect | str) -> SqlPlatform:
    """
    Look up the SQL platform for a dialect.

    Args:
        dialect: A Dialect member or its name as reported by the driver

    Returns:
        The platform rendering SQL for that dialect

    Raises:
        UnsupportedPlatformError: If the dialect is not supported

    """
    if not isinstance(dialect, Dialect):
        try:
            dialect = Dialect(dialect)
        except ValueError:
            logger.error(f"Unsupported database platform requested: {dialect}")
            raise UnsupportedPlatformError(dialect) from None

    return _PLATFORMS[dialect]


def supported_dialects() -> tuple[str, ...]:
    """Return the names of every supported dialect."""
    return tuple(dialect.value for dialect in Dialect)
