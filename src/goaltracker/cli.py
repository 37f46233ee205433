"""Flask CLI commands for GoalTracker."""

from __future__ import annotations

import json
from datetime import datetime, time, timedelta, tzinfo
from typing import Optional

import click
from flask import current_app

from .config import BaseConfig
from .errors import UserExists
from .extensions import get_goal_repository, get_user_repository
from .models.goal import Goal, GoalType
from .services import auth
from .services.analytics import compute_analytics
from .services.dates import to_local

DEMO_GOALS = (
    ("Morning exercise", "Health"),
    ("Read 30 minutes", "Personal Development"),
)


def seed_demo_goals(*, user_id: int, days: int, now: datetime) -> int:
    """Create ``days`` days of daily demo goals ending today; today stays open."""

    repo = get_goal_repository()
    created = 0
    for offset in reversed(range(days)):
        day = (now - timedelta(days=offset)).date()
        is_today = offset == 0
        for title, category in DEMO_GOALS:
            completed_at = None if is_today else datetime.combine(day, time(hour=20))
            repo.save(
                Goal(
                    user_id=user_id,
                    title=title,
                    description=f"{title} (demo)",
                    category=category,
                    type=GoalType.DAILY.value,
                    time_allotted=30,
                    deadline=datetime.combine(day, time(hour=23, minute=59)),
                    completed=not is_today,
                    completed_at=completed_at,
                    created_at=datetime.combine(day, time(hour=7)),
                    updated_at=completed_at or datetime.combine(day, time(hour=7)),
                )
            )
            created += 1
    return created


def _reference_clock() -> tuple[datetime, Optional[tzinfo]]:
    """Return naive local now on the configured reference clock, with its timezone."""

    config: BaseConfig = current_app.config["GOALTRACKER_CONFIG"]
    tz = config.reference_timezone()
    if tz is None:
        return datetime.now(), None
    return to_local(datetime.now(tz), tz), tz


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("goaltracker-seed")
    @click.option("--email", default="demo@example.com", show_default=True)
    @click.option("--name", default="Demo User", show_default=True)
    @click.option("--password", default="demo-password", show_default=True)
    @click.option("--days", default=7, show_default=True, type=click.IntRange(1, 365))
    def goaltracker_seed(email: str, name: str, password: str, days: int) -> None:
        """Seed a demo user with a run of daily goals."""

        users = get_user_repository()
        try:
            user = auth.register_user(name=name, email=email, password=password, users=users)
            click.echo(f"Created user {user.email}")
        except UserExists:
            user = users.get_by_email(auth.normalize_email(email))
            click.echo(f"Reusing user {user.email}")

        now, _ = _reference_clock()
        created = seed_demo_goals(user_id=user.id, days=days, now=now)
        click.echo(f"Created {created} demo goals over {days} days.")

    @app.cli.command("goaltracker-analytics")
    @click.option("--email", required=True)
    def goaltracker_analytics(email: str) -> None:
        """Print a user's analytics as JSON."""

        user = get_user_repository().get_by_email(auth.normalize_email(email))
        if user is None:
            raise click.ClickException(f"No user with email {email}")

        now, tz = _reference_clock()
        summary = compute_analytics(get_goal_repository().find_by_user(user.id), now, tz=tz)
        click.echo(json.dumps(summary.to_dict(), indent=2))
