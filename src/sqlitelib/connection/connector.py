"""SQLite database handle management."""

import logging
import sqlite3
from pathlib import Path
from typing import Optional, Any, Literal, Union

from sqlitelib.config import ConnectionProfile, DEFAULT_BUSY_TIMEOUT_MS, load_connection_profile
from sqlitelib.exceptions import ConfigError, DatabaseConnectionError

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


class SQLiteConnector:
    """
    SQLite handle manager with busy-timeout configuration and context manager protocol.

    The handle is opened lazily on connect() in autocommit mode, so every
    statement commits on its own. Lock contention is retried by the driver
    for up to ``busy_timeout`` milliseconds before the statement fails.

    Args:
        database: Path of the database file, or ":memory:"
        busy_timeout: Milliseconds to wait on a locked database (default 5000)

    Example:
        >>> with SQLiteConnector("/var/data/app.db") as handle:
        ...     handle.execute("SELECT sqlite_version()").fetchone()

    Note:
        A handle must not be shared across threads without external
        serialization.
    """

    def __init__(
        self,
        database: Union[str, Path],
        busy_timeout: int = DEFAULT_BUSY_TIMEOUT_MS,
    ) -> None:
        if not database or not str(database).strip():
            raise ConfigError("Database path not specified.")
        if busy_timeout < 0:
            raise ConfigError(f"busy_timeout must be >= 0, got {busy_timeout}")

        self._database = str(database)
        self._busy_timeout = busy_timeout
        self._handle: Optional[sqlite3.Connection] = None

    @classmethod
    def from_parts(
        cls,
        path: Optional[str],
        filename: Optional[str],
        busy_timeout: int = DEFAULT_BUSY_TIMEOUT_MS,
    ) -> "SQLiteConnector":
        """Create a connector from a directory path and a file name

        Raises:
            ConfigError: If path or filename is missing or empty
        """
        if path is None or not str(path).strip():
            raise ConfigError("Database path not specified.")
        if filename is None or not str(filename).strip():
            raise ConfigError("Database name not specified.")
        return cls(Path(path).expanduser() / filename, busy_timeout=busy_timeout)

    @classmethod
    def from_profile(
        cls,
        profile: Union[str, ConnectionProfile],
        path: Optional[Union[str, Path]] = None,
        **overrides: Any,
    ) -> "SQLiteConnector":
        """Create a connector from a connections.toml profile name or a ConnectionProfile"""
        if isinstance(profile, str):
            profile = load_connection_profile(profile, path=path, **overrides)
        return cls(profile.database_path, busy_timeout=profile.busy_timeout)

    @property
    def database(self) -> str:
        """Database file location"""
        return self._database

    @property
    def busy_timeout(self) -> int:
        """Busy timeout in milliseconds"""
        return self._busy_timeout

    @property
    def is_connected(self) -> bool:
        return self._handle is not None

    def connect(self) -> sqlite3.Connection:
        """
        Open the database if not already open.

        Returns:
            The sqlite3 connection handle

        Raises:
            DatabaseConnectionError: If the driver cannot open or create the file
        """
        if self._handle is None:
            try:
                handle = sqlite3.connect(
                    self._database,
                    timeout=self._busy_timeout / 1000,
                    isolation_level=None,
                )
                handle.execute(f"PRAGMA busy_timeout = {int(self._busy_timeout)}")
            except sqlite3.Error as e:
                raise DatabaseConnectionError(
                    f"Database connection failed: {self._database}: {e}"
                ) from e
            self._handle = handle
            logger.info("Opened SQLite database %s", self._database)

        return self._handle

    def close(self) -> None:
        """Close the handle, releasing resources. Safe to call more than once."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            logger.info("Closed SQLite database %s", self._database)

    def __enter__(self) -> sqlite3.Connection:
        """Context manager entry: open the database."""
        return self.connect()

    def __exit__(
        self,
        exc_type: Any,
        exc_val: Any,
        exc_tb: Any
    ) -> Literal[False]:
        """
        Context manager exit: close the database.

        Always returns False to propagate any exceptions.
        """
        self.close()
        return False

    def __repr__(self) -> str:
        """String representation of the connector."""
        status = "connected" if self._handle else "not connected"
        return f"SQLiteConnector(database='{self._database}', {status})"
