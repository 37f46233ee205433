"""SQLModel table exports."""

from .goal import Goal, GoalPriority, GoalType
from .user import User

__all__ = [
    "Goal",
    "GoalPriority",
    "GoalType",
    "User",
]
