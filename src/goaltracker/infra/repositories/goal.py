"""SQLModel implementation of Goal repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.goal import Goal
from ..database import SessionFactory


class SQLModelGoalRepository:
    """SQLModel-based goal repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def find_by_user(
        self,
        user_id: int,
        *,
        goal_type: Optional[str] = None,
        category: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> list[Goal]:
        """List a user's goals, newest first, optionally filtered."""
        with self.session_factory() as session:
            statement = select(Goal).where(Goal.user_id == user_id)
            if goal_type is not None:
                statement = statement.where(Goal.type == goal_type)
            if category is not None:
                statement = statement.where(Goal.category == category)
            if completed is not None:
                statement = statement.where(Goal.completed == completed)
            statement = statement.order_by(Goal.created_at.desc(), Goal.id.desc())  # type: ignore[union-attr]

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get(self, goal_id: int, *, user_id: int) -> Optional[Goal]:
        """Retrieve a single goal owned by the user."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def save(self, goal: Goal) -> Goal:
        """Insert or update a goal and return the stored copy."""
        with self.session_factory() as session:
            stored = goal if goal.id is None else session.merge(goal)
            session.add(stored)
            session.commit()
            session.refresh(stored)
            session.expunge(stored)
            return stored

    def delete(self, goal_id: int, *, user_id: int) -> bool:
        """Delete a goal; return False when nothing matched."""
        with self.session_factory() as session:
            goal = session.exec(
                select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
            ).first()
            if goal is None:
                return False
            session.delete(goal)
            session.commit()
            return True
