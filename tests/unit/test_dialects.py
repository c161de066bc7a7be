"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for dialect SQL generation.
"""

import pytest

from cindex.definition import IndexDefinition
from cindex.dialects import (
    Dialect,
    PostgreSQLPlatform,
    get_platform,
    index_name_pattern,
    supported_dialects,
)
from cindex.exceptions import UnsupportedPlatformError


@pytest.fixture
def platform() -> PostgreSQLPlatform:
    return get_platform("postgresql")


@pytest.mark.unit
class TestGetPlatform:
    """Tests for dialect lookup."""

    def test_by_name_and_enum(self):
        assert isinstance(get_platform("postgresql"), PostgreSQLPlatform)
        assert get_platform(Dialect.POSTGRESQL) is get_platform("postgresql")

    @pytest.mark.parametrize("dialect", ["mysql", "sqlite", "PostgreSQL", "", None])
    def test_unsupported_dialect(self, dialect):
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            get_platform(dialect)
        assert exc_info.value.platform == dialect

    def test_supported_dialects(self):
        assert supported_dialects() == ("postgresql",)


@pytest.mark.unit
class TestPostgreSQLCreate:
    """Tests for CREATE INDEX rendering."""

    def test_plain_index(self, platform, orders_index):
        assert platform.create_index_sql(orders_index) == (
            f"CREATE INDEX {orders_index.name} ON orders (customer_id)"
        )

    def test_unique_hash_partial_index(self, platform, partial_hash_index):
        assert platform.create_index_sql(partial_hash_index) == (
            f"CREATE UNIQUE INDEX {partial_hash_index.name} ON orders USING hash (status) "
            "WHERE status != 'archived'"
        )

    def test_multiple_columns_keep_order(self, platform):
        definition = IndexDefinition.create("orders", ["status", "customer_id"])
        assert platform.create_index_sql(definition).endswith("ON orders (status, customer_id)")

    def test_schema_differs_from_current(self, platform):
        definition = IndexDefinition.create("orders", ["a"], schema="reporting")
        sql = platform.create_index_sql(definition, current_schema="public")
        assert "ON reporting.orders (a)" in sql

    def test_schema_equals_current(self, platform):
        definition = IndexDefinition.create("orders", ["a"], schema="public")
        sql = platform.create_index_sql(definition, current_schema="public")
        assert "ON orders (a)" in sql

    def test_schema_not_part_of_name(self):
        plain = IndexDefinition.create("orders", ["a"])
        scoped = IndexDefinition.create("orders", ["a"], schema="reporting")
        assert plain.name == scoped.name


@pytest.mark.unit
class TestPostgreSQLStatements:
    """Tests for DROP, current schema and enumeration queries."""

    def test_drop(self, platform):
        assert platform.drop_index_sql("i_cindex_abc") == "DROP INDEX i_cindex_abc"

    def test_drop_qualified(self, platform):
        assert platform.drop_index_sql("reporting.i_cindex_abc") == "DROP INDEX reporting.i_cindex_abc"

    def test_current_schema(self, platform):
        assert platform.current_schema_sql() == "SELECT current_schema() AS current_schema"

    def test_index_list_current_schema(self, platform):
        sql = platform.index_list_sql()
        assert "FROM pg_indexes" in sql
        assert "AS relname" in sql
        assert "indexname LIKE :pattern" in sql
        assert sql.endswith("AND schemaname = current_schema()")

    def test_index_list_all_schemas(self, platform):
        sql = platform.index_list_sql(search_in_all_schemas=True)
        assert "current_schema()" not in sql
        assert "schemaname || '.' || indexname" in sql

    def test_pattern_is_not_interpolated(self, platform):
        assert "i_cindex_" not in platform.index_list_sql()
        assert index_name_pattern() == "i_cindex_%"
