"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Index definitions for CIndex.

An IndexDefinition is the logical description of one managed index: the
table it lives on, its ordered columns, uniqueness, access method, partial
index predicate and schema. Definitions are immutable and are produced by
IndexDefinitionBuilder, which resolves the index name exactly once when the
definition is built.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cindex.core.logging import get_logger
from cindex.naming import normalize_name, resolve_name

logger = get_logger(__name__)


class IndexMethod(Enum):
    """Index access methods CIndex can request."""

    BTREE = "btree"  # Standard B-tree index
    HASH = "hash"    # Hash index
    GIN = "gin"      # Generalized Inverted Index (JSON/arrays/full text)
    GIST = "gist"    # Generalized Search Tree

    @classmethod
    def values(cls) -> tuple[str, ...]:
        """Return the accepted access method names."""
        return tuple(method.value for method in cls)


def _clean_columns(columns: str | Iterable[Any] | None) -> tuple:
    """Accept a single column or an iterable and drop blank entries."""
    if columns is None:
        return ()
    if isinstance(columns, str):
        columns = [columns]

    cleaned = []
    for column in columns:
        if column is None or (isinstance(column, str) and not column.strip()):
            logger.debug("Dropping blank column entry from index definition")
            continue
        cleaned.append(column)
    return tuple(cleaned)


def _clean_using(using: "IndexMethod | str | None") -> str | None:
    if isinstance(using, IndexMethod):
        return using.value
    return using or None


@dataclass(frozen=True)
class IndexDefinition:
    """Definition of a managed database index."""

    table_name: str
    columns: tuple
    name: str
    unique: bool = False
    using: str | None = None
    where: str | None = None  # For partial indexes (WHERE clause)
    schema: str | None = None
    explicit_name: str | None = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        # Constructed directly, the name still has to carry the reserved prefix
        if isinstance(self.name, str) and self.name.strip():
            object.__setattr__(self, "name", normalize_name(self.name))

    @classmethod
    def create(
        cls,
        table_name: str,
        columns: str | Iterable[str],
        name: str | None = None,
        unique: bool = False,
        using: "IndexMethod | str | None" = None,
        where: str | None = None,
        schema: str | None = None,
    ) -> "IndexDefinition":
        """Build a definition in one call; see IndexDefinitionBuilder."""
        builder = (
            IndexDefinitionBuilder(table_name)
            .columns(columns)
            .unique(unique)
            .using(using)
            .where(where)
            .schema(schema)
        )
        if name:
            builder.name(name)
        return builder.build()

    def qualified_table_name(self, current_schema: str | None = None) -> str:
        """
        Return the table reference used in DDL.

        The schema is prepended only when it is set and differs from the
        connection's current default schema.

        Args:
            current_schema: The connection's current default schema, if known

        Returns:
            ``schema.table`` or ``table``

        """
        if self.schema and self.schema != current_schema:
            return f"{self.schema}.{self.table_name}"
        return self.table_name

    def evolve(self, **changes: Any) -> "IndexDefinition":
        """
        Return a copy with some fields replaced and the name re-resolved.

        A generated name is regenerated from the new content; an explicitly
        supplied name is kept unless ``name`` is among the changes.
        """
        builder = IndexDefinitionBuilder.from_definition(self)
        for key, value in changes.items():
            setter = getattr(builder, key, None)
            if key.startswith("_") or not callable(setter) or key in ("build", "from_definition"):
                raise TypeError(f"Unknown index definition field: {key}")
            setter(value)
        return builder.build()

    def to_dict(self) -> dict[str, Any]:
        """Convert the definition to a dictionary."""
        return {
            "name": self.name,
            "table_name": self.table_name,
            "schema": self.schema,
            "columns": list(self.columns),
            "unique": self.unique,
            "using": self.using,
            "where": self.where,
        }


class IndexDefinitionBuilder:
    """
    Accumulates index fields and produces an IndexDefinition.

    Setters return the builder so calls can be chained::

        definition = (
            IndexDefinitionBuilder("orders")
            .columns(["status"])
            .unique()
            .using("hash")
            .where("status != 'archived'")
            .build()
        )
    """

    def __init__(self, table_name: str = ""):
        self._table_name = table_name
        self._columns: tuple = ()
        self._name: str | None = None
        self._unique = False
        self._using: str | None = None
        self._where: str | None = None
        self._schema: str | None = None

    @classmethod
    def from_definition(cls, definition: IndexDefinition) -> "IndexDefinitionBuilder":
        """Start a builder pre-populated from an existing definition."""
        builder = cls(definition.table_name)
        builder._columns = tuple(definition.columns)
        builder._name = definition.explicit_name
        builder._unique = definition.unique
        builder._using = definition.using
        builder._where = definition.where
        builder._schema = definition.schema
        return builder

    def table_name(self, table_name: str) -> "IndexDefinitionBuilder":
        self._table_name = table_name
        return self

    def columns(self, columns: str | Iterable[str] | None) -> "IndexDefinitionBuilder":
        """Set the indexed columns; blank entries are silently dropped."""
        self._columns = _clean_columns(columns)
        return self

    def name(self, name: str | None) -> "IndexDefinitionBuilder":
        self._name = name or None
        return self

    def unique(self, unique: bool = True) -> "IndexDefinitionBuilder":
        self._unique = bool(unique)
        return self

    def using(self, using: IndexMethod | str | None) -> "IndexDefinitionBuilder":
        self._using = _clean_using(using)
        return self

    def where(self, where: str | None) -> "IndexDefinitionBuilder":
        self._where = str(where) if where else None
        return self

    def schema(self, schema: str | None) -> "IndexDefinitionBuilder":
        self._schema = schema or None
        return self

    def build(self) -> IndexDefinition:
        """Resolve the name and freeze the accumulated fields."""
        name = resolve_name(
            self._table_name or "",
            self._columns,
            unique=self._unique,
            using=self._using,
            where=self._where,
            name=self._name,
        )
        return IndexDefinition(
            table_name=self._table_name,
            columns=self._columns,
            name=name,
            unique=self._unique,
            using=self._using,
            where=self._where,
            schema=self._schema,
            explicit_name=self._name,
        )
