"""Unit tests for SQLiteConnector and Connection construction."""

import sqlite3

import pytest
from unittest.mock import Mock, patch

from sqlitelib.config import ConnectionProfile
from sqlitelib.connection import Connection, SQLiteConnector
from sqlitelib.exceptions import ConfigError, DatabaseConnectionError


class TestSQLiteConnector:
    """Tests for SQLiteConnector class."""

    def test_connection_lazy_initialization(self, db_dir):
        """Test that the database is not opened until connect() is called."""
        connector = SQLiteConnector(db_dir / "lazy.db")

        assert connector.is_connected is False
        assert not (db_dir / "lazy.db").exists()

    @patch("sqlite3.connect")
    def test_connect_sets_busy_timeout(self, mock_connect):
        """Test that connect() passes the timeout and sets the busy_timeout pragma."""
        mock_handle = Mock()
        mock_connect.return_value = mock_handle

        connector = SQLiteConnector("/data/app.db", busy_timeout=2500)
        handle = connector.connect()

        assert handle is mock_handle
        mock_connect.assert_called_once_with("/data/app.db", timeout=2.5, isolation_level=None)
        mock_handle.execute.assert_called_once_with("PRAGMA busy_timeout = 2500")

    @patch("sqlite3.connect")
    def test_connect_reuses_existing_handle(self, mock_connect):
        """Test that calling connect() twice doesn't open a new handle."""
        mock_connect.return_value = Mock()

        connector = SQLiteConnector("/data/app.db")
        first = connector.connect()
        second = connector.connect()

        assert mock_connect.call_count == 1
        assert first is second

    @patch("sqlite3.connect")
    def test_close_releases_resources(self, mock_connect):
        """Test that close() closes the handle and is idempotent."""
        mock_handle = Mock()
        mock_connect.return_value = mock_handle

        connector = SQLiteConnector("/data/app.db")
        connector.connect()
        connector.close()
        connector.close()

        mock_handle.close.assert_called_once()
        assert connector.is_connected is False

    @patch("sqlite3.connect")
    def test_context_manager_handles_exceptions(self, mock_connect):
        """Test that the context manager closes the handle even on exception."""
        mock_handle = Mock()
        mock_connect.return_value = mock_handle

        with pytest.raises(RuntimeError):
            with SQLiteConnector("/data/app.db") as handle:
                assert handle is mock_handle
                raise RuntimeError("Test exception")

        mock_handle.close.assert_called_once()

    @patch("sqlite3.connect", side_effect=sqlite3.OperationalError("unable to open database file"))
    def test_driver_failure_is_connection_error(self, mock_connect):
        connector = SQLiteConnector("/nowhere/app.db")

        with pytest.raises(DatabaseConnectionError, match="unable to open database file"):
            connector.connect()
        assert connector.is_connected is False

    def test_missing_directory_is_connection_error(self, tmp_path):
        """Test a real driver failure: the directory does not exist."""
        connector = SQLiteConnector(tmp_path / "missing" / "app.db")

        with pytest.raises(DatabaseConnectionError):
            connector.connect()

    @pytest.mark.parametrize("path, filename", [
        (None, "app.db"),
        ("", "app.db"),
        ("/data", None),
        ("/data", "  "),
    ])
    def test_from_parts_requires_path_and_filename(self, path, filename):
        with pytest.raises(ConfigError):
            SQLiteConnector.from_parts(path, filename)

    def test_from_parts_joins_path(self):
        connector = SQLiteConnector.from_parts("/data", "app.db")
        assert connector.database == "/data/app.db"

    def test_negative_timeout_rejected(self):
        with pytest.raises(ConfigError):
            SQLiteConnector("/data/app.db", busy_timeout=-5)

    def test_from_profile(self, config_file, db_dir):
        connector = SQLiteConnector.from_profile("dev", path=config_file)

        assert connector.database == str(db_dir / "dev.db")
        assert connector.busy_timeout == 250

    def test_from_profile_object(self):
        profile = ConnectionProfile(path="/data", filename="p.db", busy_timeout=1)
        connector = SQLiteConnector.from_profile(profile)

        assert connector.database == "/data/p.db"
        assert connector.busy_timeout == 1

    def test_repr(self):
        connector = SQLiteConnector("/data/app.db")
        repr_str = repr(connector)

        assert "SQLiteConnector" in repr_str
        assert "/data/app.db" in repr_str
        assert "not connected" in repr_str


class TestConnectionOpen:
    """Tests for Connection construction."""

    @pytest.mark.parametrize("path, filename", [(None, "app.db"), ("", "app.db"), ("/tmp", "")])
    def test_open_requires_path_and_filename(self, path, filename):
        with pytest.raises(ConfigError):
            Connection.open(path, filename)

    def test_open_creates_file(self, db_dir):
        with Connection.open(str(db_dir), "new.db") as db:
            assert db.busy_timeout == 5000
            assert "open" in repr(db)
        assert (db_dir / "new.db").exists()
        assert "closed" in repr(db)

    def test_open_missing_directory(self, tmp_path):
        with pytest.raises(DatabaseConnectionError):
            Connection.open(str(tmp_path / "missing"), "app.db")

    def test_busy_timeout_applied_to_handle(self, db_dir):
        with Connection.open(str(db_dir), "t.db", busy_timeout=1234) as db:
            row = db.execute_raw("PRAGMA busy_timeout").fetch_one()
            assert list(row.values()) == [1234]

    def test_from_profile(self, config_file, db_dir):
        with Connection.from_profile("default", path=config_file) as db:
            assert db.database == str(db_dir / "default.db")

    def test_in_memory(self):
        with Connection.in_memory() as db:
            assert db.list_tables() == []
