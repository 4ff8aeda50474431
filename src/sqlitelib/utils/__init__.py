"""Shared helpers"""

from .identifiers import (
    is_valid_identifier,
    is_valid_table_name,
    require_identifier,
    require_table_name,
)

__all__ = [
    "is_valid_identifier",
    "is_valid_table_name",
    "require_identifier",
    "require_table_name",
]
