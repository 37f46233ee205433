"""In-memory repositories for running without a database.

Stored objects are copied on the way in and out so callers only ever hold
snapshots, matching the detached objects the SQLModel repositories return.
"""

from __future__ import annotations

import threading
from itertools import count
from typing import Optional

from ...errors import UserExists
from ...models.goal import Goal
from ...models.user import User


def _copy_goal(goal: Goal) -> Goal:
    return Goal(**goal.model_dump())


def _copy_user(user: User) -> User:
    return User(**user.model_dump())


class InMemoryGoalRepository:
    """Dictionary-backed goal repository."""

    def __init__(self) -> None:
        self._goals: dict[int, Goal] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def find_by_user(
        self,
        user_id: int,
        *,
        goal_type: Optional[str] = None,
        category: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> list[Goal]:
        with self._lock:
            rows = [
                goal
                for goal in self._goals.values()
                if goal.user_id == user_id
                and (goal_type is None or goal.type == goal_type)
                and (category is None or goal.category == category)
                and (completed is None or goal.completed == completed)
            ]
            rows.sort(key=lambda goal: (goal.created_at, goal.id or 0), reverse=True)
            return [_copy_goal(goal) for goal in rows]

    def get(self, goal_id: int, *, user_id: int) -> Optional[Goal]:
        with self._lock:
            goal = self._goals.get(goal_id)
            if goal is None or goal.user_id != user_id:
                return None
            return _copy_goal(goal)

    def save(self, goal: Goal) -> Goal:
        with self._lock:
            stored = _copy_goal(goal)
            if stored.id is None:
                stored.id = next(self._ids)
            self._goals[stored.id] = stored
            return _copy_goal(stored)

    def delete(self, goal_id: int, *, user_id: int) -> bool:
        with self._lock:
            goal = self._goals.get(goal_id)
            if goal is None or goal.user_id != user_id:
                return False
            del self._goals[goal_id]
            return True


class InMemoryUserRepository:
    """Dictionary-backed user repository."""

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def get(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return _copy_user(user) if user is not None else None

    def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return _copy_user(user)
            return None

    def save(self, user: User) -> User:
        with self._lock:
            if any(
                other.email == user.email and other.id != user.id
                for other in self._users.values()
            ):
                raise UserExists("User with this email already exists")
            stored = _copy_user(user)
            if stored.id is None:
                stored.id = next(self._ids)
            self._users[stored.id] = stored
            return _copy_user(stored)
