"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Index naming for CIndex.

Every index managed by CIndex carries the reserved prefix ``i_cindex_`` so it
can be told apart from indexes created by other means. Generated names are
content-addressed: two processes describing the same table, columns, access
method, predicate and uniqueness always agree on the identifier.
"""

import hashlib
from collections.abc import Sequence

PREFIX = "i_cindex_"

UNIQUE = "unique"

# PostgreSQL truncates identifiers longer than NAMEDATALEN - 1
MAX_IDENTIFIER_LENGTH = 63


def normalize_name(name: str) -> str:
    """
    Prepend the reserved prefix to a name unless it already carries it.

    Args:
        name: Explicit or generated index name

    Returns:
        The name starting with ``PREFIX``

    """
    if name.startswith(PREFIX):
        return name
    return f"{PREFIX}{name}"


def name_digest_source(
    table_name: str,
    columns: Sequence[str],
    using: str | None = None,
    where: str | None = None,
) -> str:
    """Build the string hashed into a generated index name."""
    source = table_name + "".join(str(column) for column in columns) + (using or "")
    if where:
        source += f"_{where}"
    return source


def generate_name(
    table_name: str,
    columns: Sequence[str],
    unique: bool = False,
    using: str | None = None,
    where: str | None = None,
) -> str:
    """
    Derive an index name from the definition content.

    Column order is part of the identity: the same columns in a different
    order produce a different name.

    Args:
        table_name: Unqualified table name
        columns: Indexed columns in definition order
        unique: Whether the index enforces uniqueness
        using: Access method, if any
        where: Partial index predicate, if any

    Returns:
        ``PREFIX`` + optional ``unique_`` marker + md5 hex digest

    """
    source = name_digest_source(table_name, columns, using, where)
    digest = hashlib.md5(source.encode("utf-8")).hexdigest()
    marker = f"{UNIQUE}_" if unique else ""
    return f"{PREFIX}{marker}{digest}"


def resolve_name(
    table_name: str,
    columns: Sequence[str],
    unique: bool = False,
    using: str | None = None,
    where: str | None = None,
    name: str | None = None,
) -> str:
    """
    Resolve the final index name.

    An explicit non-blank ``name`` wins and is only prefix-normalized;
    otherwise the name is generated from the other fields.
    """
    if name and name.strip():
        return normalize_name(name)
    return generate_name(table_name, columns, unique=unique, using=using, where=where)
