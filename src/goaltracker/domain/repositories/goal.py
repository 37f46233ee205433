"""Goal repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.goal import Goal


class GoalRepository(Protocol):
    """Repository for managing goal entities."""

    def find_by_user(
        self,
        user_id: int,
        *,
        goal_type: Optional[str] = None,
        category: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> list[Goal]:
        """List a user's goals, newest first, optionally filtered."""
        ...

    def get(self, goal_id: int, *, user_id: int) -> Optional[Goal]:
        """Retrieve a single goal owned by the user."""
        ...

    def save(self, goal: Goal) -> Goal:
        """Insert or update a goal and return the stored copy."""
        ...

    def delete(self, goal_id: int, *, user_id: int) -> bool:
        """Delete a goal; return False when nothing matched."""
        ...
