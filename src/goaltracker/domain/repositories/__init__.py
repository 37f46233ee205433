"""Repository protocol definitions for domain layer."""

from .goal import GoalRepository
from .user import UserRepository

__all__ = [
    "GoalRepository",
    "UserRepository",
]
