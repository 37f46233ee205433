"""Goal use cases on top of a goal repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from ..domain.repositories import GoalRepository
from ..errors import InvalidId, NotFound
from ..logging_config import get_logger
from ..models.goal import Goal, GoalPriority

logger = get_logger("services.goals")

ALL = "all"
_EDITABLE_FIELDS = {
    "title",
    "description",
    "category",
    "type",
    "priority",
    "time_allotted",
    "deadline",
}


def parse_goal_id(raw: str) -> int:
    """Convert a path segment into a goal id."""

    try:
        goal_id = int(raw)
    except (TypeError, ValueError):
        raise InvalidId("Invalid goal ID") from None
    if goal_id < 1:
        raise InvalidId("Invalid goal ID")
    return goal_id


def _filter_value(value: Optional[str]) -> Optional[str]:
    if value is None or value == ALL or value == "":
        return None
    return value


def list_goals(
    goals: GoalRepository,
    user_id: int,
    *,
    goal_type: Optional[str] = None,
    category: Optional[str] = None,
    completed: Optional[str] = None,
) -> list[Goal]:
    """Return a user's goals, newest first, honoring query-string filters."""

    return goals.find_by_user(
        user_id,
        goal_type=_filter_value(goal_type),
        category=_filter_value(category),
        completed=None if completed is None else completed == "true",
    )


def create_goal(
    goals: GoalRepository,
    user_id: int,
    fields: dict[str, Any],
    *,
    now: datetime,
) -> Goal:
    """Persist a new, incomplete goal."""

    values = {key: fields[key] for key in _EDITABLE_FIELDS if key in fields}
    values.setdefault("priority", GoalPriority.MEDIUM.value)
    goal = Goal(
        user_id=user_id,
        completed=False,
        completed_at=None,
        created_at=now,
        updated_at=now,
        **values,
    )
    goal = goals.save(goal)
    logger.info("Goal created", extra={"goal_id": goal.id, "user_id": user_id, "goal_type": goal.type})
    return goal


def get_goal(goals: GoalRepository, user_id: int, goal_id: int) -> Goal:
    goal = goals.get(goal_id, user_id=user_id)
    if goal is None:
        raise NotFound("Goal not found", code="GOAL_NOT_FOUND")
    return goal


def update_goal(
    goals: GoalRepository,
    user_id: int,
    goal_id: int,
    changes: dict[str, Any],
    *,
    now: datetime,
) -> Goal:
    """Apply a partial update; toggling ``completed`` maintains ``completed_at``."""

    goal = get_goal(goals, user_id, goal_id)

    for key in _EDITABLE_FIELDS & changes.keys():
        setattr(goal, key, changes[key])

    if changes.get("completed") is not None:
        completed = bool(changes["completed"])
        if completed and not goal.completed:
            goal.completed_at = now
        elif not completed and goal.completed:
            goal.completed_at = None
        goal.completed = completed

    goal.updated_at = now
    goal = goals.save(goal)
    logger.info(
        "Goal updated",
        extra={"goal_id": goal.id, "user_id": user_id, "fields": sorted(changes)},
    )
    return goal


def delete_goal(goals: GoalRepository, user_id: int, goal_id: int) -> None:
    if not goals.delete(goal_id, user_id=user_id):
        raise NotFound("Goal not found", code="GOAL_NOT_FOUND")
    logger.info("Goal deleted", extra={"goal_id": goal_id, "user_id": user_id})


__all__ = [
    "create_goal",
    "delete_goal",
    "get_goal",
    "list_goals",
    "parse_goal_id",
    "update_goal",
]
