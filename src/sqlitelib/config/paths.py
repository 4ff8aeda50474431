"""Path resolution for sqlitelib configuration files."""

import os
from pathlib import Path
from typing import Optional, Union

CONFIG_FILENAME = "connections.toml"


def get_config_dir() -> Path:
    """
    Get the configuration directory for sqlitelib.

    Priority order:
    1. SQLITELIB_CONFIG_DIR environment variable (override)
    2. ~/.sqlitelib/ (dotfile directory in user home)

    The directory is resolved on every call and is not created.

    Returns:
        Path: Configuration directory path
    """
    env_config_dir = os.getenv("SQLITELIB_CONFIG_DIR")
    if env_config_dir:
        return Path(env_config_dir)

    return Path.home() / ".sqlitelib"


def get_default_config_path() -> Path:
    """
    Get the path to connections.toml configuration file.

    Returns:
        Path: The path to connections.toml

    Raises:
        FileNotFoundError: If connections.toml doesn't exist in the config directory
    """
    config_path = get_config_dir() / CONFIG_FILENAME

    if not config_path.exists():
        error_msg = (
            f"Configuration file '{CONFIG_FILENAME}' not found at: {config_path}\n\n"
            f"Create it with one table per profile, for example:\n"
            f"  [default]\n"
            f"  path = \"/var/data/\"\n"
            f"  filename = \"app.db\"\n"
            f"  busy_timeout = 5000\n\n"
            f"Configuration directory priority:\n"
            f"  1. SQLITELIB_CONFIG_DIR environment variable (if set)\n"
            f"  2. ~/.sqlitelib/ (dotfile directory)\n"
        )

        raise FileNotFoundError(error_msg)

    return config_path


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Resolve the configuration file path.

    Args:
        path: Optional explicit path to connections.toml file.
              If None, uses default resolution logic.

    Returns:
        Path: Resolved path object
    """
    if path:
        return Path(path)
    return get_default_config_path()
