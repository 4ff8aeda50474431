"""Utilities for validating SQLite identifiers"""

import re

from sqlitelib.exceptions import InvalidArgumentError

_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def is_valid_identifier(name: str) -> bool:
    """Check if a string is a valid unquoted SQLite identifier"""
    if not name or not isinstance(name, str):
        return False
    return bool(_IDENTIFIER.match(name))


def is_valid_table_name(name: str) -> bool:
    """Check a table name, allowing a single schema qualifier (e.g. main.users)"""
    if not name or not isinstance(name, str):
        return False
    parts = name.split(".")
    if len(parts) > 2:
        return False
    return all(is_valid_identifier(part) for part in parts)


def require_identifier(name: str, kind: str = "column") -> str:
    """Return the name unchanged or raise InvalidArgumentError"""
    if not is_valid_identifier(name):
        msg = (
            f"Invalid {kind} name: {name!r}. "
            "Only unquoted identifiers are supported "
            "(letters, digits, underscores; must start with letter or underscore)."
        )
        raise InvalidArgumentError(msg)
    return name


def require_table_name(name: str) -> str:
    """Return the table name unchanged or raise InvalidArgumentError"""
    if not is_valid_table_name(name):
        msg = (
            f"Invalid table name: {name!r}. "
            "Use an unquoted identifier, optionally qualified as schema.table."
        )
        raise InvalidArgumentError(msg)
    return name
