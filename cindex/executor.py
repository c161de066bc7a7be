"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Statement execution for CIndex.

CIndex only builds SQL text. Running it is delegated to an executor supplied
by the caller, described here by three small protocols. SQLAlchemyExecutor
implements them on top of a SQLAlchemy Connection.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from sqlalchemy import text
from sqlalchemy.engine import Connection, CursorResult

from cindex.core.logging import get_logger

logger = get_logger(__name__)


class ResultSet(Protocol):
    """Rows returned by an executed statement."""

    def fetchone(self) -> Mapping[str, Any] | None: ...

    def fetchall(self) -> list[Mapping[str, Any]]: ...


class PreparedStatement(Protocol):
    """
    A statement with bindable parameters.

    Keys are parameter names or positions; implementations may support only
    one of the two.
    """

    def bind_parameter(self, key: str | int, value: Any) -> None: ...

    def execute(self) -> ResultSet: ...


class Executor(Protocol):
    """Prepares statements against a database connection."""

    def prepare(self, sql: str) -> PreparedStatement: ...


def escape_bind_markers(sql: str) -> str:
    """Escape colons so SQLAlchemy text() does not read them as bind parameters."""
    return sql.replace(":", r"\:")


class SQLAlchemyResultSet:
    """ResultSet over a SQLAlchemy CursorResult, yielding rows as mappings."""

    def __init__(self, result: CursorResult):
        self.result = result

    def fetchone(self) -> Mapping[str, Any] | None:
        if not self.result.returns_rows:
            return None
        return self.result.mappings().fetchone()

    def fetchall(self) -> list[Mapping[str, Any]]:
        if not self.result.returns_rows:
            return []
        return list(self.result.mappings().fetchall())


class SQLAlchemyStatement:
    """
    PreparedStatement backed by ``sqlalchemy.text``.

    Statements without bound parameters have every colon escaped, so DDL
    containing casts such as ``data::jsonb`` in a predicate is sent verbatim.
    """

    def __init__(self, connection: Connection, sql: str):
        self.connection = connection
        self.sql = sql
        self.parameters: dict[str, Any] = {}

    def bind_parameter(self, key: str | int, value: Any) -> None:
        """
        Bind a named parameter, e.g. ``pattern`` for ``:pattern``.

        Raises:
            TypeError: If the key is not a name; text() has no positional binds

        """
        if not isinstance(key, str):
            raise TypeError(
                f"SQLAlchemyStatement binds parameters by name, got {type(key).__name__} key {key!r}",
            )
        self.parameters[key] = value

    def execute(self) -> SQLAlchemyResultSet:
        if self.parameters:
            statement = text(self.sql).bindparams(**self.parameters)
        else:
            statement = text(escape_bind_markers(self.sql))

        logger.debug(f"Executing: {self.sql}")
        return SQLAlchemyResultSet(self.connection.execute(statement))


class SQLAlchemyExecutor:
    """
    Executor running CIndex statements on a SQLAlchemy connection.

    Transaction handling stays with the caller: nothing is committed or
    rolled back here.
    """

    def __init__(self, connection: Connection):
        """
        Initialize the executor.

        Args:
            connection: An open SQLAlchemy connection

        """
        self.connection = connection

    @property
    def dialect_name(self) -> str:
        """Name of the connection's SQL dialect, e.g. ``postgresql``."""
        return self.connection.dialect.name

    def prepare(self, sql: str) -> SQLAlchemyStatement:
        return SQLAlchemyStatement(self.connection, sql)
