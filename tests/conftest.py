"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from sqlitelib import Connection

USERS_DDL = "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, age INTEGER)"


@pytest.fixture
def db_dir(tmp_path: Path) -> Path:
    """Directory holding the test database file."""
    directory = tmp_path / "data"
    directory.mkdir()
    return directory


@pytest.fixture
def db(db_dir: Path):
    """Open connection to a fresh database file with an empty users table."""
    connection = Connection.open(str(db_dir), "test.db")
    connection.execute_raw(USERS_DDL)
    yield connection
    connection.close()


@pytest.fixture
def alice(db: Connection) -> Connection:
    """Database with a single user (1, 'Alice', 30)."""
    db.insert("users", {"id": 1, "name": "Alice", "age": 30})
    return db


@pytest.fixture
def config_file(tmp_path: Path, db_dir: Path) -> Path:
    """Temporary connections.toml with a few profiles."""
    config_content = f"""
[default]
path = "{db_dir.as_posix()}"
filename = "default.db"

[dev]
path = "{db_dir.as_posix()}"
filename = "dev.db"
busy_timeout = 250

[broken]
path = "{db_dir.as_posix()}"
filename = ""
"""
    config_path = tmp_path / "connections.toml"
    config_path.write_text(config_content)
    return config_path
