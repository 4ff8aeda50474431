"""Primitive operations to wrap direct sqlite3 calls"""

from sqlitelib.primitives.result import QueryResult

from sqlitelib.primitives.execution import (
    execute_statement,
    fetch_one,
    fetch_all,
    fetch_df,
)

from sqlitelib.primitives.metadata import (
    table_exists,
    list_tables,
    get_columns,
)

__all__ = [
    # Results
    "QueryResult",
    # Execution
    "execute_statement",
    "fetch_one",
    "fetch_all",
    "fetch_df",
    # Metadata
    "table_exists",
    "list_tables",
    "get_columns",
]
