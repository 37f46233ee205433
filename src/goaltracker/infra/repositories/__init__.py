"""Concrete repository implementations."""

from .goal import SQLModelGoalRepository
from .memory import InMemoryGoalRepository, InMemoryUserRepository
from .user import SQLModelUserRepository

__all__ = [
    "InMemoryGoalRepository",
    "InMemoryUserRepository",
    "SQLModelGoalRepository",
    "SQLModelUserRepository",
]
