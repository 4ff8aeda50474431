"""SQL execution primitives.

Plain functions for executing SQL statements and fetching results.
These are thin wrappers around sqlite3 cursor operations that bind
parameters by name and translate driver failures into StatementError.
"""

import logging
import sqlite3
from typing import Any, Optional, Sequence, Union

import pandas as pd

from sqlitelib.exceptions import StatementError
from sqlitelib.query.binding import ParamBinding, bindings_to_params
from sqlitelib.query.builder import Statement

from .result import QueryResult

logger = logging.getLogger(__name__)

Bindings = Optional[Sequence[ParamBinding]]


def execute_statement(
    handle: sqlite3.Connection,
    sql: Union[str, Statement],
    bindings: Bindings = None,
) -> QueryResult:
    """Prepare, bind and execute one statement.

    Args:
        handle: Open sqlite3 connection
        sql: SQL text with named placeholders, or a built Statement
        bindings: ParamBindings bound by name (ignored when sql is a Statement)

    Returns:
        QueryResult wrapping the executed cursor

    Example:
        >>> stmt = build_select("users", ["name"], [WhereClause("age", ">", 21)])
        >>> result = execute_statement(handle, stmt)
        >>> result.fetch_all()
        [{'name': 'Alice'}]

    Raises:
        StatementError: If preparation, binding or execution fails
    """
    if isinstance(sql, Statement):
        sql, bindings = sql.sql, sql.bindings

    params = bindings_to_params(bindings)
    logger.debug("Executing %s with %d parameter(s)", sql, len(params))

    try:
        cursor = handle.execute(sql, params)
    except sqlite3.ProgrammingError as e:
        # Raised for unknown or missing placeholders and unsupported parameter types
        raise StatementError("Failed to bind parameters", str(e)) from e
    except (OverflowError, ValueError) as e:
        # Ints outside 64-bit range and strs that cannot be encoded as UTF-8
        raise StatementError("Failed to bind parameters", str(e)) from e
    except sqlite3.OperationalError as e:
        # Syntax errors, missing tables and lock timeouts surface here
        raise StatementError("Failed to execute statement", str(e)) from e
    except (sqlite3.Error, sqlite3.Warning) as e:
        # Python 3.10 reports more than one statement as sqlite3.Warning
        raise StatementError("Failed to execute statement", str(e)) from e

    return QueryResult(_cursor=cursor, _sql=sql)


def fetch_all(
    handle: sqlite3.Connection,
    sql: Union[str, Statement],
    bindings: Bindings = None,
) -> list[dict[str, Any]]:
    """Execute query and return all rows as column -> value dicts.

    Warning:
        Loads all results into memory.
    """
    return execute_statement(handle, sql, bindings).fetch_all()


def fetch_one(
    handle: sqlite3.Connection,
    sql: Union[str, Statement],
    bindings: Bindings = None,
) -> Optional[dict[str, Any]]:
    """Execute query and return the first row as a dict, or None if no results"""
    return execute_statement(handle, sql, bindings).fetch_one()


def fetch_df(
    handle: sqlite3.Connection,
    sql: Union[str, Statement],
    bindings: Bindings = None,
    lowercase_columns: bool = False,
) -> pd.DataFrame:
    """Execute query and return pandas DataFrame.

    Args:
        handle: Open sqlite3 connection
        sql: SQL SELECT query or built Statement
        bindings: ParamBindings bound by name
        lowercase_columns: Convert column names to lowercase (default: False)

    Returns:
        pandas DataFrame with query results
    """
    result = execute_statement(handle, sql, bindings)
    return result.to_df(lowercase_columns=lowercase_columns)
