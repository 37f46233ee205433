"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

STORAGE_BACKENDS = {"sql", "memory"}


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "GoalTracker"
    DB_FILENAME = "goaltracker.db"
    JWT_ALGORITHM = "HS256"
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("GOALTRACKER_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("GOALTRACKER_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("GOALTRACKER_DATABASE_URL", self._build_sqlite_url())
        self.STORAGE = os.getenv("GOALTRACKER_STORAGE", "sql").strip().lower()
        self.TIMEZONE = os.getenv("GOALTRACKER_TIMEZONE", "").strip()
        self.ACCESS_TOKEN_DAYS = _env_int("GOALTRACKER_ACCESS_TOKEN_DAYS", 7)
        self.REFRESH_TOKEN_DAYS = _env_int("GOALTRACKER_REFRESH_TOKEN_DAYS", 30)
        self.PING_MESSAGE = os.getenv("PING_MESSAGE", "ping")

        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("GOALTRACKER_SECRET_KEY must be set in non-dev mode.")
        if self.STORAGE not in STORAGE_BACKENDS:
            raise ValueError(
                f"GOALTRACKER_STORAGE must be one of {sorted(STORAGE_BACKENDS)}, got {self.STORAGE!r}"
            )

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("GOALTRACKER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}

    def reference_timezone(self) -> tzinfo | None:
        """Return the configured reference timezone, or None for server wall clock."""

        if not self.TIMEZONE:
            return None
        try:
            return ZoneInfo(self.TIMEZONE)
        except ZoneInfoNotFoundError as exc:
            raise ValueError(f"Unknown GOALTRACKER_TIMEZONE: {self.TIMEZONE!r}") from exc


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test suite."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        if self.SECRET_KEY == "replace-me":
            self.SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"


CONFIG_MAP: dict[str, type[BaseConfig]] = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}
