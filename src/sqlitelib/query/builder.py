"""Build SELECT/INSERT/UPDATE/DELETE statements with named parameter bindings

Pure functions, no I/O. Each builder returns a Statement holding the SQL
text and the bindings its placeholders refer to.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from sqlitelib.exceptions import InvalidArgumentError, MissingConditionError
from sqlitelib.utils.identifiers import require_identifier, require_table_name

from .binding import ASSIGN_SCOPE, ParamBinding, bindings_to_params
from .clause import WhereClause, compile_where

Assignments = Union[
    Mapping[str, Any],
    Sequence[Mapping[str, Any]],
    Sequence[tuple[str, Any]],
]
Clauses = Union[WhereClause, Sequence[WhereClause], None]

WILDCARD = "*"


@dataclass(frozen=True)
class Statement:
    """SQL text with its ordered parameter bindings"""
    sql: str
    bindings: tuple[ParamBinding, ...] = ()

    def params(self) -> dict[str, Any]:
        """Bindings as the name -> value mapping passed to sqlite3"""
        return bindings_to_params(self.bindings)

    def as_tuple(self) -> tuple[str, dict[str, Any]]:
        """Get both SQL and parameters as a tuple"""
        return self.sql, self.params()


def normalize_clauses(where: Clauses) -> list[WhereClause]:
    """Accept a single clause, a sequence of clauses or None"""
    if where is None:
        return []
    if isinstance(where, WhereClause):
        return [where]
    return list(where)


def normalize_assignments(assignments: Assignments) -> list[tuple[str, Any]]:
    """Flatten assignments into ordered (column, value) pairs

    Accepts a mapping ({"id": 2, "name": "Bob"}), a sequence of mappings
    ([{"id": 2}, {"name": "Bob"}]) or a sequence of pairs
    ([("id", 2), ("name", "Bob")]).

    Raises:
        InvalidArgumentError: On an unrecognised item or a repeated column
    """
    items: Iterable[Any]
    if isinstance(assignments, Mapping):
        items = [assignments]
    elif isinstance(assignments, (str, bytes)) or assignments is None:
        raise InvalidArgumentError("Assignments must be a mapping or a sequence")
    else:
        items = assignments

    pairs: list[tuple[str, Any]] = []
    seen: set[str] = set()
    for item in items:
        if isinstance(item, Mapping):
            entries = list(item.items())
        elif isinstance(item, (tuple, list)) and len(item) == 2:
            entries = [(item[0], item[1])]
        else:
            raise InvalidArgumentError(
                f"Assignment must be a mapping or a (column, value) pair, got {item!r}"
            )
        for column, value in entries:
            require_identifier(column)
            if column in seen:
                raise InvalidArgumentError(f"Column {column!r} is assigned more than once")
            seen.add(column)
            pairs.append((column, value))
    return pairs


def _assignment_bindings(pairs: Sequence[tuple[str, Any]]) -> list[ParamBinding]:
    """One binding per assignment, named in the assignment scope"""
    return [
        ParamBinding.for_column(column, value, index, 0, ASSIGN_SCOPE)
        for index, (column, value) in enumerate(pairs)
    ]


def is_wildcard(columns: Optional[Sequence[str]]) -> bool:
    """True if the column list means "all columns" (None, empty or ["*"])"""
    if not columns:
        return True
    return len(columns) == 1 and columns[0] == WILDCARD


def build_select(
    table: str,
    columns: Optional[Sequence[str]] = None,
    where: Clauses = None,
) -> Statement:
    """Build a SELECT statement

    Example:
        >>> stmt = build_select("users", ["name"], [WhereClause("age", "=", 25)])
        >>> stmt.sql
        'SELECT name FROM users WHERE age = :w0_0_age'
    """
    require_table_name(table)
    if is_wildcard(columns):
        column_sql = WILDCARD
    else:
        assert columns is not None
        if isinstance(columns, str):
            raise InvalidArgumentError("Columns must be a sequence of names, not a string")
        column_sql = ", ".join(require_identifier(column) for column in columns)

    sql = f"SELECT {column_sql} FROM {table}"
    compiled = compile_where(normalize_clauses(where))
    if compiled.fragment:
        sql += f" WHERE {compiled.fragment}"
    return Statement(sql, compiled.bindings)


def build_insert(table: str, assignments: Assignments) -> Statement:
    """Build an INSERT statement, one binding per column in the given order

    Example:
        >>> build_insert("users", {"id": 2, "name": "Bob"}).sql
        'INSERT INTO users (id, name) VALUES (:s0_0_id, :s1_0_name)'
    """
    require_table_name(table)
    pairs = normalize_assignments(assignments)
    if not pairs:
        raise InvalidArgumentError("INSERT requires at least one column assignment")

    bindings = _assignment_bindings(pairs)
    columns = ", ".join(column for column, _ in pairs)
    placeholders = ", ".join(binding.placeholder for binding in bindings)
    sql = f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"
    return Statement(sql, tuple(bindings))


def build_update(table: str, assignments: Assignments, where: Clauses) -> Statement:
    """Build an UPDATE statement; an unconditional UPDATE is rejected

    Raises:
        MissingConditionError: If no WHERE clause is given
        InvalidArgumentError: If there is nothing to assign
    """
    require_table_name(table)
    clauses = normalize_clauses(where)
    if not clauses:
        raise MissingConditionError(
            f"UPDATE on {table!r} requires at least one WHERE condition"
        )
    pairs = normalize_assignments(assignments)
    if not pairs:
        raise InvalidArgumentError("UPDATE requires at least one column assignment")

    bindings = _assignment_bindings(pairs)
    set_sql = ", ".join(
        f"{column} = {binding.placeholder}"
        for (column, _), binding in zip(pairs, bindings)
    )
    compiled = compile_where(clauses)
    sql = f"UPDATE {table} SET {set_sql} WHERE {compiled.fragment}"
    return Statement(sql, tuple(bindings) + compiled.bindings)


def build_delete(table: str, where: Clauses) -> Statement:
    """Build a DELETE statement; an unconditional DELETE is rejected

    Raises:
        MissingConditionError: If no WHERE clause is given
    """
    require_table_name(table)
    clauses = normalize_clauses(where)
    if not clauses:
        raise MissingConditionError(
            f"DELETE on {table!r} requires at least one WHERE condition"
        )
    compiled = compile_where(clauses)
    return Statement(f"DELETE FROM {table} WHERE {compiled.fragment}", compiled.bindings)
