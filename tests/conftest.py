"""Pytest configuration and shared fixtures for GoalTracker tests.

This module provides database fixtures, goal factories and a configured Flask
test client so domain logic, repositories and routes can be tested without
touching a real data directory.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from itertools import count
from typing import Callable

import pytest
from sqlmodel import SQLModel, create_engine

from goaltracker import create_app
from goaltracker.infra.database import create_session_factory
from goaltracker.infra.repositories import SQLModelUserRepository
from goaltracker.models import Goal, User

# Reference point used by engine tests: Saturday, Aug 24 2024, mid-afternoon.
TODAY = date(2024, 8, 24)
NOW = datetime(2024, 8, 24, 15, 0)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point configuration at a throwaway data dir and clear overrides."""

    for name in (
        "GOALTRACKER_DATABASE_URL",
        "GOALTRACKER_STORAGE",
        "GOALTRACKER_TIMEZONE",
        "GOALTRACKER_SECRET_KEY",
        "GOALTRACKER_ACCESS_TOKEN_DAYS",
        "GOALTRACKER_REFRESH_TOKEN_DAYS",
        "PING_MESSAGE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GOALTRACKER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("GOALTRACKER_DEV_MODE", "true")
    return tmp_path


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create an isolated SQLite database for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one repositories receive in the app."""

    return create_session_factory(db_engine)


@pytest.fixture
def user(session_factory) -> User:
    """Create a default user for scoping data."""

    return SQLModelUserRepository(session_factory).save(
        User(name="Tester", email="tester@example.com", password_hash="dummy-hash")
    )


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def goal_factory() -> Callable[..., Goal]:
    """Factory for unsaved goal snapshots fed straight to the engine.

    Returns:
        Callable: Function that builds Goal instances
    """

    ids = count(1)

    def _create_goal(
        deadline,
        *,
        completed: bool = False,
        goal_type: str = "daily",
        category: str | None = "Health",
        created_at=None,
        user_id: int = 1,
        title: str = "Test goal",
    ) -> Goal:
        """Build a goal with sensible defaults.

        Args:
            deadline: Due date (date, datetime, or a raw stored value)
            completed: Completion flag; sets completed_at when true
            goal_type: 'daily', 'weekly' or 'monthly'
            category: Category label
            created_at: Creation timestamp (defaults to the deadline)
        """
        if created_at is None:
            created_at = deadline if isinstance(deadline, datetime) else NOW
        return Goal(
            id=next(ids),
            user_id=user_id,
            title=title,
            description=f"{title} description",
            category=category,
            type=goal_type,
            time_allotted=30,
            deadline=deadline,
            completed=completed,
            completed_at=datetime.combine(TODAY, time(hour=12)) if completed else None,
            created_at=created_at,
            updated_at=created_at,
        )

    return _create_goal


@pytest.fixture
def day() -> Callable[[int], datetime]:
    """Return the end-of-day deadline ``days_ago`` days before TODAY."""

    def _day(days_ago: int) -> datetime:
        return datetime.combine(TODAY - timedelta(days=days_ago), time(23, 59, 59))

    return _day


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app():
    """Flask app backed by a SQLite file in the temp data dir."""

    application = create_app("testing")
    yield application
    engine = application.extensions["goaltracker"].engine
    if engine is not None:
        engine.dispose()


@pytest.fixture
def memory_app(monkeypatch):
    """Flask app using the in-memory repositories."""

    monkeypatch.setenv("GOALTRACKER_STORAGE", "memory")
    return create_app("testing")


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


def _register(client, email: str = "alex@example.com", password: str = "secret-pass") -> dict:
    """Register a user through the API and return the auth response body."""

    response = client.post(
        "/api/auth/register",
        json={"name": "Alex", "email": email, "password": password},
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()


@pytest.fixture
def register():
    """Helper that registers a user through the API."""

    return _register


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    body = _register(client)
    return {"Authorization": f"Bearer {body['accessToken']}"}
