"""Metadata query primitives.

Functions for introspecting the SQLite schema catalog (tables, columns).
"""

import sqlite3

from sqlitelib.query.binding import ParamBinding
from sqlitelib.utils.identifiers import require_table_name

from .execution import execute_statement

_TABLE_EXISTS_SQL = (
    "SELECT name FROM sqlite_master "
    "WHERE type = 'table' AND name = :table_name COLLATE NOCASE"
)
_LIST_TABLES_SQL = (
    "SELECT name FROM sqlite_master "
    "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
)


def table_exists(handle: sqlite3.Connection, table: str) -> bool:
    """Check if a table exists via the sqlite_master catalog.

    Example:
        >>> table_exists(handle, "users")
        True
    """
    require_table_name(table)
    sql = _TABLE_EXISTS_SQL
    if "." in table:
        schema, table = table.split(".", 1)
        sql = sql.replace("sqlite_master", f"{schema}.sqlite_master")
    result = execute_statement(handle, sql, [ParamBinding("table_name", table)])
    return result.fetch_one() is not None


def list_tables(handle: sqlite3.Connection) -> list[str]:
    """List user tables in the database, sorted by name."""
    result = execute_statement(handle, _LIST_TABLES_SQL)
    return [row["name"] for row in result.fetch_all()]


def get_columns(handle: sqlite3.Connection, table: str) -> list[str]:
    """Get column names of a table in declaration order.

    Uses PRAGMA table_info; the table name is validated first because
    PRAGMA arguments cannot be bound as parameters.

    Returns:
        List of column names, empty if the table does not exist
    """
    require_table_name(table)
    if "." in table:
        schema, name = table.split(".", 1)
        sql = f"PRAGMA {schema}.table_info({name})"
    else:
        sql = f"PRAGMA table_info({table})"
    result = execute_statement(handle, sql)
    return [row["name"] for row in result.fetch_all()]
