"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Command line interface for CIndex.

This module provides commands to print generated index names, render CREATE
and DROP statements, validate definitions, and list the managed indexes that
exist in a database.
"""

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy import create_engine

from cindex.core.config import DatabaseConfig, get_app_config, init_app_config
from cindex.core.logging import correlation_id, get_logger
from cindex.definition import IndexDefinition
from cindex.dialects import SqlPlatform, get_platform
from cindex.exceptions import UnsupportedPlatformError
from cindex.manager import get_index_manager
from cindex.validation import ConstraintViolation, validate_index_definition

logger = get_logger(__name__)

app = typer.Typer(help="CIndex custom index utility")
sql_app = typer.Typer(help="Render index DDL")
app.add_typer(sql_app, name="sql")

console = Console()

# Option declarations shared by commands that take an index definition
TABLE_OPTION = typer.Option(..., "--table", "-t", help="Table the index is on")
COLUMN_OPTION = typer.Option(..., "--column", "-c", help="Indexed column, repeat for several (order matters)")
UNIQUE_OPTION = typer.Option(False, "--unique", help="Create a unique index")
USING_OPTION = typer.Option(None, "--using", help="Access method (btree, hash, gin, gist)")
WHERE_OPTION = typer.Option(None, "--where", help="Partial index predicate")
SCHEMA_OPTION = typer.Option(None, "--schema", help="Schema of the table")
NAME_OPTION = typer.Option(None, "--name", help="Explicit index name (prefix added if missing)")
DIALECT_OPTION = typer.Option(None, "--dialect", help="SQL dialect to render for (defaults to CINDEX_DIALECT)")


def configure_app(debug: bool = False):
    """Initialize configuration and logging for a CLI run."""
    config = init_app_config(debug=debug)
    config.configure_logging()
    return config


@app.callback()
def callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """CIndex: deterministically named partial and method-specific indexes."""
    try:
        configure_app(debug=debug)
    except ValueError as e:
        console.print(f"Error: invalid configuration ({e})", style="red", markup=False)
        raise typer.Exit(code=1)


def _build_definition(
    table: str,
    columns: list[str],
    unique: bool,
    using: str | None,
    where: str | None,
    schema: str | None = None,
    name: str | None = None,
) -> IndexDefinition:
    return IndexDefinition.create(
        table_name=table,
        columns=columns,
        name=name,
        unique=unique,
        using=using,
        where=where,
        schema=schema,
    )


def _resolve_platform(dialect: str | None) -> SqlPlatform:
    """Look up the platform for --dialect, falling back to the configured dialect."""
    try:
        return get_platform(dialect or get_app_config().index.dialect)
    except UnsupportedPlatformError as e:
        _exit_unsupported(e)


def _exit_unsupported(error: UnsupportedPlatformError):
    console.print(f"Error: {error}", style="red", markup=False)
    raise typer.Exit(code=2)


def _exit_invalid(violations: list[ConstraintViolation]):
    table_view = Table(title="Index Definition Violations")
    table_view.add_column("Field")
    table_view.add_column("Constraint")
    table_view.add_column("Message")
    for violation in violations:
        table_view.add_row(violation.field_name, violation.constraint, violation.message)

    console.print(table_view)
    raise typer.Exit(code=1)


@app.command("name")
def show_name(
    table: str = TABLE_OPTION,
    column: list[str] = COLUMN_OPTION,
    unique: bool = UNIQUE_OPTION,
    using: str | None = USING_OPTION,
    where: str | None = WHERE_OPTION,
):
    """Print the generated name for an index definition."""
    definition = _build_definition(table, column, unique, using, where)
    console.print(definition.name, highlight=False, markup=False)


@sql_app.command("create")
def create_sql(
    table: str = TABLE_OPTION,
    column: list[str] = COLUMN_OPTION,
    unique: bool = UNIQUE_OPTION,
    using: str | None = USING_OPTION,
    where: str | None = WHERE_OPTION,
    schema: str | None = SCHEMA_OPTION,
    name: str | None = NAME_OPTION,
    current_schema: str | None = typer.Option(
        None, "--current-schema", help="Connection's default schema, to decide table qualification",
    ),
    dialect: str | None = DIALECT_OPTION,
):
    """Validate a definition and print its CREATE INDEX statement."""
    platform = _resolve_platform(dialect)

    definition = _build_definition(table, column, unique, using, where, schema, name)
    violations = validate_index_definition(definition)
    if violations:
        _exit_invalid(violations)

    sql = platform.create_index_sql(definition, current_schema)
    console.print(sql, highlight=False, markup=False, soft_wrap=True)


@sql_app.command("drop")
def drop_sql(
    name: str = typer.Argument(..., help="Index name as stored in the catalog"),
    dialect: str | None = DIALECT_OPTION,
):
    """Print the DROP INDEX statement for an index name."""
    platform = _resolve_platform(dialect)
    console.print(platform.drop_index_sql(name), highlight=False, markup=False, soft_wrap=True)


@app.command("validate")
def validate_definition(
    table: str = typer.Option("", "--table", "-t", help="Table the index is on"),
    column: list[str] = typer.Option([], "--column", "-c", help="Indexed column, repeat for several"),
    unique: bool = UNIQUE_OPTION,
    using: str | None = USING_OPTION,
    where: str | None = WHERE_OPTION,
    schema: str | None = SCHEMA_OPTION,
    name: str | None = NAME_OPTION,
):
    """Validate an index definition and report every violation."""
    definition = _build_definition(table, column, unique, using, where, schema, name)
    violations = validate_index_definition(definition)

    if violations:
        _exit_invalid(violations)

    console.print(f"Index definition {definition.name} is valid", style="green")


@app.command("list")
def list_indexes(
    url: str | None = typer.Option(
        None, "--url", help="SQLAlchemy database URL (defaults to CINDEX_* environment settings)",
    ),
    all_schemas: bool | None = typer.Option(
        None,
        "--all-schemas/--current-schema-only",
        help="Search every schema, not only the current one (defaults to CINDEX_SEARCH_ALL_SCHEMAS)",
    ),
):
    """List managed indexes present in the database."""
    if all_schemas is None:
        all_schemas = get_app_config().index.search_in_all_schemas

    if url is None:
        try:
            url = DatabaseConfig.from_env().get_connection_string()
        except ValueError as e:
            console.print(f"Error: database connection details not provided ({e})", style="red", markup=False)
            raise typer.Exit(code=1)

    logger.debug(f"Listing managed indexes from {url}")
    engine = create_engine(url)
    try:
        with engine.connect() as connection:
            try:
                manager = get_index_manager(connection)
            except UnsupportedPlatformError as e:
                _exit_unsupported(e)
            names = manager.list_indexes(search_in_all_schemas=all_schemas)
    finally:
        engine.dispose()

    if not names:
        console.print("No managed indexes found", style="yellow")
        return

    table_view = Table(title="Managed Indexes")
    table_view.add_column("Index")
    for name in names:
        table_view.add_row(name)
    console.print(table_view)


def main():
    """Entry point for the ``cindex`` console script."""
    # One correlation ID per invocation ties its log lines together
    with correlation_id():
        app()


if __name__ == "__main__":
    main()
