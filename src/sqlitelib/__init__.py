"""
sqlitelib - query building and safe parameter binding for SQLite

Code is organized in layers
- config/ loads connection profiles
- query/ compiles WHERE clauses and statements into SQL plus named bindings (no I/O)
- primitives/ wraps sqlite3 in low-level execution and metadata functions
- connection/ owns a database handle and exposes validated CRUD operations
"""

# Layer 1: Configuration
from sqlitelib.config import load_profile, list_profiles, ConnectionProfile

# Layer 2: Query building
from sqlitelib.query import (
    Operator,
    Arity,
    BindType,
    ParamBinding,
    WhereClause,
    Statement,
    infer_type,
    placeholder_name,
    build_select,
    build_insert,
    build_update,
    build_delete,
)

# Layer 3: Primitives
from sqlitelib.primitives import (
    QueryResult,
    execute_statement,
    fetch_all,
    fetch_df,
)

# Layer 4: Connection
from sqlitelib.connection import Connection, SQLiteConnector

from sqlitelib.exceptions import (
    SqliteLibError,
    ConfigError,
    DatabaseConnectionError,
    InvalidArgumentError,
    UnsupportedOperatorError,
    MissingConditionError,
    QueryError,
    SchemaError,
    StatementError,
)

__version__ = "0.1.0"
__all__ = [
    # Layer 1: Configuration
    "load_profile",
    "list_profiles",
    "ConnectionProfile",
    # Layer 2: Query building
    "Operator",
    "Arity",
    "BindType",
    "ParamBinding",
    "WhereClause",
    "Statement",
    "infer_type",
    "placeholder_name",
    "build_select",
    "build_insert",
    "build_update",
    "build_delete",
    # Layer 3: Primitives
    "QueryResult",
    "execute_statement",
    "fetch_all",
    "fetch_df",
    # Layer 4: Connection
    "Connection",
    "SQLiteConnector",
    # Errors
    "SqliteLibError",
    "ConfigError",
    "DatabaseConnectionError",
    "InvalidArgumentError",
    "UnsupportedOperatorError",
    "MissingConditionError",
    "QueryError",
    "SchemaError",
    "StatementError",
]
