"""
Test configuration and fixtures for the cindex project.

This file is the root pytest configuration file that registers markers and
provides the executor doubles shared by unit and integration tests.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine

from cindex.definition import IndexDefinition


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "db: mark a test that requires database access")
    config.addinivalue_line("markers", "cli: mark a test that tests CLI functionality")


@pytest.fixture
def mock_executor() -> MagicMock:
    """
    Mock executor for unit testing.

    ``prepare`` always returns the same statement mock, whose result reports
    ``public`` as the current schema and no enumerated indexes.
    """
    result = MagicMock()
    result.fetchone.return_value = {"current_schema": "public"}
    result.fetchall.return_value = []

    statement = MagicMock()
    statement.execute.return_value = result

    executor = MagicMock()
    executor.prepare.return_value = statement
    return executor


@pytest.fixture
def orders_index() -> IndexDefinition:
    """A plain single-column index on orders."""
    return IndexDefinition.create("orders", ["customer_id"])


@pytest.fixture
def partial_hash_index() -> IndexDefinition:
    """A unique, hash, partial index on orders."""
    return IndexDefinition.create(
        "orders",
        ["status"],
        unique=True,
        using="hash",
        where="status != 'archived'",
    )


@pytest.fixture
def sqlite_engine():
    """Create an in-memory SQLite database with an orders table."""
    engine = create_engine("sqlite:///:memory:")

    metadata = MetaData()
    Table(
        "orders", metadata,
        Column("id", Integer, primary_key=True),
        Column("customer_id", Integer),
        Column("status", String),
    )
    metadata.create_all(engine)

    yield engine
    engine.dispose()
