"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Managed index operations for CIndex.

CustomIndexManager ties the pieces together: it validates a definition,
resolves the connection's current schema when the table needs qualifying,
renders SQL for the active dialect and hands it to the executor. Errors from
the executor reach the caller unchanged; nothing here retries or opens
transactions.
"""

import logging
from typing import Any

from sqlalchemy.engine import Connection, Engine

from cindex.core.logging import get_logger, log_operation
from cindex.definition import IndexDefinition
from cindex.dialects import INDEX_PATTERN_PARAM, Dialect, get_platform, index_name_pattern
from cindex.executor import Executor, SQLAlchemyExecutor
from cindex.schema import CurrentSchemaResolver
from cindex.validation import ConstraintViolation, ensure_valid, validate_index_definition

logger = get_logger(__name__)

RELATION_NAME_COLUMN = "relname"


class CustomIndexManager:
    """
    Creates, drops and lists indexes carrying the CIndex name prefix.

    The manager is bound to one executor and one dialect. The dialect is
    checked on construction, so an unsupported one fails before any SQL is
    built.
    """

    def __init__(
        self,
        executor: Executor,
        dialect: Dialect | str,
        schema_resolver: CurrentSchemaResolver | None = None,
    ):
        """
        Initialize the index manager.

        Args:
            executor: Collaborator that prepares and runs statements
            dialect: Dialect of the database behind the executor
            schema_resolver: Current-schema cache for this connection; one is
                created when not supplied

        Raises:
            UnsupportedPlatformError: If the dialect is not supported

        """
        self.executor = executor
        self.platform = get_platform(dialect)
        self.dialect = self.platform.dialect
        self.schema_resolver = schema_resolver or CurrentSchemaResolver(executor, self.platform)

    def validate(self, definition: IndexDefinition) -> list[ConstraintViolation]:
        """Return every rule violation for a definition."""
        return validate_index_definition(definition)

    def current_schema(self) -> str | None:
        """Return the connection's current default schema (memoized)."""
        return self.schema_resolver.resolve()

    def create_index_sql(self, definition: IndexDefinition) -> str:
        """
        Render CREATE INDEX for a definition without executing it.

        The current schema is only looked up when the definition names a
        schema, since otherwise the table is never qualified.
        """
        current_schema = self.current_schema() if definition.schema else None
        return self.platform.create_index_sql(definition, current_schema)

    def drop_index_sql(self, index_name: str) -> str:
        return self.platform.drop_index_sql(index_name)

    def create(self, definition: IndexDefinition) -> Any:
        """
        Create an index in the database.

        Args:
            definition: Index definition

        Returns:
            Whatever the executor returns for the statement

        Raises:
            IndexValidationError: If the definition breaks any rule

        """
        ensure_valid(definition)
        sql = self.create_index_sql(definition)
        logger.debug(f"Rendered: {sql}")

        context = {"index_name": definition.name, "table_name": definition.table_name}
        with log_operation(logger, f"create index {definition.name}", logging.DEBUG, context):
            result = self.executor.prepare(sql).execute()

        logger.info(
            f"Created index {definition.name} on {definition.table_name}({', '.join(definition.columns)})",
        )
        return result

    def drop(self, index_name: str) -> Any:
        """
        Drop an index from the database.

        Args:
            index_name: Index name as stored in the catalog, optionally
                schema-qualified

        Returns:
            Whatever the executor returns for the statement

        """
        sql = self.drop_index_sql(index_name)

        with log_operation(logger, f"drop index {index_name}", logging.DEBUG, {"index_name": index_name}):
            result = self.executor.prepare(sql).execute()

        logger.info(f"Dropped index {index_name}")
        return result

    def list_indexes(self, search_in_all_schemas: bool = False) -> list[str]:
        """
        List managed indexes currently present in the database.

        Args:
            search_in_all_schemas: Look in every schema rather than only the
                current default schema

        Returns:
            Index names formatted as ``schema.index``

        """
        statement = self.executor.prepare(self.platform.index_list_sql(search_in_all_schemas))
        statement.bind_parameter(INDEX_PATTERN_PARAM, index_name_pattern())
        rows = statement.execute().fetchall()

        names = [row[RELATION_NAME_COLUMN] for row in rows]
        logger.debug(f"Found {len(names)} managed index(es)")
        return names

    def index_exists(
        self, index: IndexDefinition | str, search_in_all_schemas: bool = False,
    ) -> bool:
        """
        Check whether a managed index is present in the database.

        Args:
            index: A definition or a resolved index name, optionally
                schema-qualified
            search_in_all_schemas: Look in every schema rather than only the
                current default schema

        """
        name = index.name if isinstance(index, IndexDefinition) else index
        existing = self.list_indexes(search_in_all_schemas)
        if "." in name:
            return name in existing
        return any(found.rsplit(".", 1)[-1] == name for found in existing)


def get_index_manager(
    connection: Connection,
    dialect: Dialect | str | None = None,
) -> CustomIndexManager:
    """
    Get an index manager for a SQLAlchemy connection.

    Args:
        connection: Open SQLAlchemy connection; the caller owns closing it and
            committing
        dialect: Dialect override; defaults to the connection's dialect name

    Returns:
        CustomIndexManager instance

    Raises:
        TypeError: If given an Engine instead of a Connection

    """
    if isinstance(connection, Engine):
        raise TypeError("get_index_manager needs an open Connection, e.g. engine.connect()")

    executor = SQLAlchemyExecutor(connection)
    return CustomIndexManager(executor, dialect or executor.dialect_name)
