"""Where the block settings database lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "blocksettings"
DEFAULT_DB_FILENAME: Final[str] = "blocksettings.db"
DATA_DIR_ENV: Final[str] = "BLOCKSETTINGS_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"
SQL_ECHO_ENV: Final[str] = "BLOCKSETTINGS_SQL_ECHO"

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def database_path(self, *, ensure: bool = True) -> Path:
        data_dir = self.resolve_data_dir()
        if ensure:
            data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / self.database_filename

    def sqlite_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    echo: bool = False


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    configured = os.getenv(DATA_DIR_ENV)
    if configured:
        return StorageConfig(data_dir=Path(configured))
    return StorageConfig(data_dir=_platform_data_home() / APP_DIR_NAME)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Resolve the database URI; ``DATABASE_URI`` wins over the SQLite file in the data dir."""

    echo = os.getenv(SQL_ECHO_ENV, "").strip().lower() in _TRUTHY
    uri = os.getenv(DATABASE_URI_ENV) or (storage or get_storage_config()).sqlite_uri()
    return DatabaseConfig(uri=uri, echo=echo)
