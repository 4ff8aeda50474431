"""Exception hierarchy for sqlitelib"""

from typing import Any


class SqliteLibError(Exception):
    """Base exception for all sqlitelib errors"""

    def __init__(self, message: str, *args: Any) -> None:
        self.message = message
        super().__init__(message, *args)

    def __str__(self) -> str:
        return self.message


class ConfigError(SqliteLibError, ValueError):
    """Missing or invalid connection settings (path, filename, profile values)"""


class DatabaseConnectionError(SqliteLibError):
    """The database file could not be opened or created"""


class InvalidArgumentError(SqliteLibError, ValueError):
    """A condition value has the wrong shape, or an identifier or bind value is invalid"""


class UnsupportedOperatorError(InvalidArgumentError):
    """The operator is not one of the supported condition operators"""


class MissingConditionError(SqliteLibError):
    """UPDATE or DELETE was requested without any WHERE condition"""


class QueryError(SqliteLibError):
    """Base for failures raised while running a query against the database"""


class SchemaError(QueryError):
    """A referenced table or column does not exist"""


class StatementError(QueryError):
    """The driver failed to prepare, bind or execute a statement"""

    def __init__(self, message: str, driver_message: str = "") -> None:
        self.driver_message = driver_message
        if driver_message:
            message = f"{message}: {driver_message}"
        super().__init__(message)
