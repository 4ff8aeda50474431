"""Configuration module exports."""

from .config import (
    ConnectionProfile,
    DEFAULT_BUSY_TIMEOUT_MS,
    load_profile,
    load_connection_profile,
    list_profiles,
)
from .paths import resolve_config_path, get_default_config_path, get_config_dir

__all__ = [
    "ConnectionProfile",
    "DEFAULT_BUSY_TIMEOUT_MS",
    "load_profile",
    "load_connection_profile",
    "list_profiles",
    "resolve_config_path",
    "get_default_config_path",
    "get_config_dir",
]
