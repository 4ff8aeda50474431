"""High-level CRUD operations over a single SQLite database handle."""

import sqlite3
from pathlib import Path
from typing import Any, Iterable, Literal, Optional, Sequence, Union

import pandas as pd

from sqlitelib.config import ConnectionProfile, DEFAULT_BUSY_TIMEOUT_MS
from sqlitelib.exceptions import SchemaError
from sqlitelib.primitives import (
    QueryResult,
    execute_statement,
    get_columns,
    list_tables,
    table_exists,
)
from sqlitelib.query import (
    ParamBinding,
    Statement,
    WhereClause,
    build_delete,
    build_insert,
    build_select,
    build_update,
    is_wildcard,
    normalize_assignments,
    normalize_clauses,
)
from sqlitelib.query.builder import Assignments, Clauses

from .connector import MEMORY_DATABASE, SQLiteConnector


class Connection:
    """
    Owns one SQLite database handle and exposes validated CRUD operations.

    Every operation checks that the table (and any named column) exists
    before running, so a typo fails with SchemaError instead of an opaque
    driver error. UPDATE and DELETE without a WHERE condition are rejected
    with MissingConditionError before the database is touched.

    Example:
        >>> with Connection.open("/var/data/", "app.db") as db:
        ...     db.insert("users", {"id": 1, "name": "Alice", "age": 30})
        ...     db.select("users", ["name"], WhereClause("age", ">=", 18))
        [{'name': 'Alice'}]

    Note:
        Not safe to share across threads without external serialization.
    """

    def __init__(self, connector: SQLiteConnector) -> None:
        """Wrap a connector, opening the database immediately

        Raises:
            DatabaseConnectionError: If the database cannot be opened
        """
        self._connector = connector
        self._handle: sqlite3.Connection = connector.connect()

    @classmethod
    def open(
        cls,
        path: Optional[str],
        filename: Optional[str],
        busy_timeout: int = DEFAULT_BUSY_TIMEOUT_MS,
    ) -> "Connection":
        """
        Open (or create) the database file ``filename`` in directory ``path``.

        Raises:
            ConfigError: If path or filename is missing or empty
            DatabaseConnectionError: If the driver cannot open the file
        """
        return cls(SQLiteConnector.from_parts(path, filename, busy_timeout=busy_timeout))

    @classmethod
    def from_profile(
        cls,
        profile: Union[str, ConnectionProfile],
        path: Optional[Union[str, Path]] = None,
        **overrides: Any,
    ) -> "Connection":
        """Open the database described by a connections.toml profile"""
        return cls(SQLiteConnector.from_profile(profile, path=path, **overrides))

    @classmethod
    def in_memory(cls, busy_timeout: int = DEFAULT_BUSY_TIMEOUT_MS) -> "Connection":
        """Open a private in-memory database"""
        return cls(SQLiteConnector(MEMORY_DATABASE, busy_timeout=busy_timeout))

    @property
    def handle(self) -> sqlite3.Connection:
        """The underlying sqlite3 connection"""
        return self._handle

    @property
    def database(self) -> str:
        return self._connector.database

    @property
    def busy_timeout(self) -> int:
        return self._connector.busy_timeout

    # Schema checks

    def table_exists(self, table: str) -> bool:
        """Check if a table exists"""
        return table_exists(self._handle, table)

    def get_columns(self, table: str) -> list[str]:
        """Column names of a table in declaration order"""
        return get_columns(self._handle, table)

    def list_tables(self) -> list[str]:
        """User tables in the database, sorted by name"""
        return list_tables(self._handle)

    def check_table_and_columns(
        self,
        table: str,
        columns: Optional[Iterable[str]] = None,
    ) -> None:
        """
        Verify that a table and the given columns exist.

        A missing, empty or ["*"] column list only checks the table.

        Raises:
            SchemaError: If the table or any column does not exist
        """
        if not self.table_exists(table):
            raise SchemaError(f"Table does not exist. Table: {table}")

        column_list = list(columns) if columns is not None else []
        if is_wildcard(column_list):
            return

        # SQLite resolves column names case-insensitively
        existing = {name.casefold() for name in self.get_columns(table)}
        for column in column_list:
            if column.casefold() not in existing:
                raise SchemaError(f"Column does not exist. Column: {column} (table: {table})")

    def _check(self, table: str, columns: Sequence[str], clauses: Sequence[WhereClause]) -> None:
        """Check the table, the named columns and every column referenced in clauses"""
        referenced = list(columns)
        for clause in clauses:
            if clause.column not in referenced:
                referenced.append(clause.column)
        self.check_table_and_columns(table, referenced)

    def _run(self, statement: Statement) -> QueryResult:
        return execute_statement(self._handle, statement)

    # CRUD

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        where: Clauses = None,
    ) -> list[dict[str, Any]]:
        """
        Select rows, materialized eagerly as column -> value dicts.

        Args:
            table: Table to select from
            columns: Column names; None, [] or ["*"] selects all columns
            where: A WhereClause or a sequence of them, joined with AND

        Raises:
            SchemaError: If the table or a column does not exist
            StatementError: If the driver fails
        """
        clauses = normalize_clauses(where)
        statement = build_select(table, columns, clauses)
        wanted = [] if is_wildcard(columns) else list(columns or [])
        self._check(table, wanted, clauses)
        return self._run(statement).fetch_all()

    def select_df(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        where: Clauses = None,
        lowercase_columns: bool = False,
    ) -> pd.DataFrame:
        """Select rows into a pandas DataFrame (same checks as select)"""
        clauses = normalize_clauses(where)
        statement = build_select(table, columns, clauses)
        wanted = [] if is_wildcard(columns) else list(columns or [])
        self._check(table, wanted, clauses)
        return self._run(statement).to_df(lowercase_columns=lowercase_columns)

    def insert(self, table: str, assignments: Assignments) -> int:
        """
        Insert one row.

        Args:
            table: Table to insert into
            assignments: {"col": value}, [{"col": value}, ...] or [("col", value), ...]

        Returns:
            Number of rows inserted

        Raises:
            SchemaError: If the table or a column does not exist
            StatementError: If the driver fails (e.g. a constraint violation)
        """
        pairs = normalize_assignments(assignments)
        statement = build_insert(table, pairs)
        self._check(table, [column for column, _ in pairs], [])
        return self._run(statement).rowcount

    def update(self, table: str, assignments: Assignments, where: Clauses) -> int:
        """
        Update rows matching every WHERE condition.

        Returns:
            Number of rows updated

        Raises:
            MissingConditionError: If where is empty (nothing is executed)
            SchemaError: If the table or a column does not exist
            StatementError: If the driver fails
        """
        clauses = normalize_clauses(where)
        # Missing conditions are reported before malformed assignments
        pairs = normalize_assignments(assignments) if clauses else []
        statement = build_update(table, pairs, clauses)
        self._check(table, [column for column, _ in pairs], clauses)
        return self._run(statement).rowcount

    def delete(self, table: str, where: Clauses) -> int:
        """
        Delete rows matching every WHERE condition.

        Returns:
            Number of rows deleted

        Raises:
            MissingConditionError: If where is empty (nothing is executed)
            SchemaError: If the table or a column does not exist
            StatementError: If the driver fails
        """
        clauses = normalize_clauses(where)
        statement = build_delete(table, clauses)
        self._check(table, [], clauses)
        return self._run(statement).rowcount

    def execute_raw(
        self,
        sql: str,
        bindings: Optional[Sequence[ParamBinding]] = None,
    ) -> QueryResult:
        """
        Execute any statement, binding every ParamBinding by name.

        Example:
            >>> db.execute_raw("CREATE TABLE users (id INTEGER, name TEXT, age INTEGER)")
            >>> db.execute_raw(
            ...     "SELECT * FROM users WHERE id = :id", [ParamBinding("id", 1)]
            ... ).fetch_all()

        Raises:
            StatementError: If preparation, binding or execution fails
        """
        return execute_statement(self._handle, sql, bindings)

    # Lifecycle

    def close(self) -> None:
        """Close the database handle."""
        self._connector.close()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> Literal[False]:
        self.close()
        return False

    def __repr__(self) -> str:
        status = "open" if self._connector.is_connected else "closed"
        return f"Connection(database='{self.database}', {status})"
