"""Connection module exports."""

from .connector import SQLiteConnector, MEMORY_DATABASE
from .connection import Connection

__all__ = [
    "SQLiteConnector",
    "MEMORY_DATABASE",
    "Connection",
]
