"""Configuration loading for SQLite connection profiles."""

import sys
from pathlib import Path
from typing import Dict, Union, Optional, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Use tomllib for Python 3.11+, fallback to tomli for older versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from sqlitelib.exceptions import ConfigError

from .paths import resolve_config_path

DEFAULT_BUSY_TIMEOUT_MS = 5000


class ConnectionProfile(BaseModel):
    """Validated connection settings: database directory, file name and busy timeout"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str
    filename: str
    busy_timeout: int = Field(default=DEFAULT_BUSY_TIMEOUT_MS, ge=0)

    @field_validator("path", "filename")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @property
    def database_path(self) -> Path:
        """Full path of the database file (path joined with filename)"""
        return Path(self.path).expanduser() / self.filename

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], source: str = "settings") -> "ConnectionProfile":
        """Validate a raw settings dict, raising ConfigError on any problem"""
        try:
            return cls(**settings)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc']) or 'profile'}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigError(f"Invalid connection settings in {source}: {problems}") from e


def load_profile(
    profile: str,
    path: Optional[Union[str, Path]] = None
) -> Dict[str, Any]:
    """
    Load a SQLite connection profile from connections.toml file.

    Args:
        profile: Name of the profile to load
        path: Optional explicit path to connections.toml file.
              If None, searches in standard locations.

    Returns:
        Dictionary containing connection parameters for the profile

    Raises:
        FileNotFoundError: If connections.toml file is not found
        KeyError: If the specified profile doesn't exist in the file

    Example:
        >>> config = load_profile("dev")
        >>> config
        {'path': '/var/data/', 'filename': 'dev.db', 'busy_timeout': 5000}
    """
    config_file = resolve_config_path(path)

    if not config_file.exists():
        raise FileNotFoundError(
            f"sqlitelib configuration file not found at {config_file}. " +
            "Create a connections.toml file with a table per profile."
        )

    with open(config_file, "rb") as f:
        all_profiles = tomllib.load(f)

    if profile not in all_profiles:
        available = ", ".join(all_profiles.keys())
        raise KeyError(
            f"Profile '{profile}' not found in {config_file}. " +
            f"Available profiles: {available}"
        )

    return dict(all_profiles[profile])


def load_connection_profile(
    profile: str,
    path: Optional[Union[str, Path]] = None,
    **overrides: Any
) -> ConnectionProfile:
    """Load a profile, apply overrides and validate it into a ConnectionProfile"""
    settings = load_profile(profile, path=path)
    settings.update(overrides)
    return ConnectionProfile.from_settings(settings, source=f"profile '{profile}'")


def list_profiles(path: Optional[Union[str, Path]] = None) -> list[str]:
    """
    List all available profiles in connections.toml file.

    Args:
        path: Optional explicit path to connections.toml file

    Returns:
        List of profile names

    Example:
        >>> list_profiles()
        ['default', 'dev', 'test']
    """
    config_file = resolve_config_path(path)

    if not config_file.exists():
        return []

    with open(config_file, "rb") as f:
        all_profiles = tomllib.load(f)

    return list(all_profiles.keys())
