"""Storage wiring for the Flask application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flask import Flask, current_app
from sqlalchemy.engine import Engine

from .config import BaseConfig
from .domain.repositories import GoalRepository, UserRepository
from .infra.database import bootstrap_database
from .infra.repositories import (
    InMemoryGoalRepository,
    InMemoryUserRepository,
    SQLModelGoalRepository,
    SQLModelUserRepository,
)
from .logging_config import get_logger

EXTENSION_KEY = "goaltracker"

logger = get_logger("extensions")


@dataclass(slots=True)
class Storage:
    """Repositories handed to request handlers."""

    goals: GoalRepository
    users: UserRepository
    engine: Optional[Engine] = None


def build_storage(config: BaseConfig) -> Storage:
    """Create repositories for the configured storage backend."""

    if config.STORAGE == "memory":
        logger.info("Using in-memory storage; data is lost on restart")
        return Storage(goals=InMemoryGoalRepository(), users=InMemoryUserRepository())

    engine, session_factory = bootstrap_database(config)
    logger.info("Database ready", extra={"database_url": engine.url.render_as_string()})
    return Storage(
        goals=SQLModelGoalRepository(session_factory),
        users=SQLModelUserRepository(session_factory),
        engine=engine,
    )


def init_storage(app: Flask) -> Storage:
    """Attach repositories to the application."""

    config: BaseConfig = app.config["GOALTRACKER_CONFIG"]
    storage = build_storage(config)
    app.extensions[EXTENSION_KEY] = storage
    return storage


def get_storage() -> Storage:
    """Return the repositories for the current application."""

    storage = current_app.extensions.get(EXTENSION_KEY)
    if storage is None:  # pragma: no cover - exercised only on misconfigured apps
        raise RuntimeError("Storage not initialized")
    return storage


def get_goal_repository() -> GoalRepository:
    return get_storage().goals


def get_user_repository() -> UserRepository:
    return get_storage().users
