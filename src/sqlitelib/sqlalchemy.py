"""Optional SQLAlchemy integration for sqlitelib profiles"""

from pathlib import Path
from typing import Any, Optional, Union

from sqlalchemy import create_engine, Engine

from sqlitelib.config import ConnectionProfile, load_connection_profile


def create_engine_from_profile(
    profile: Union[str, ConnectionProfile] = "default",
    path: Optional[Union[str, Path]] = None,
    **engine_kwargs: Any
) -> Engine:
    """Create SQLAlchemy engine from a sqlitelib profile with its busy timeout"""
    if isinstance(profile, str):
        profile = load_connection_profile(profile, path=path)

    connect_args = dict(engine_kwargs.pop("connect_args", {}))
    # sqlite3 takes the busy timeout in seconds
    connect_args.setdefault("timeout", profile.busy_timeout / 1000)

    url = f"sqlite:///{profile.database_path.as_posix()}"
    return create_engine(url, connect_args=connect_args, **engine_kwargs)
