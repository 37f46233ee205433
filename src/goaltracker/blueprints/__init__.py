"""Blueprint exports."""

from . import analytics, auth, goals, system

__all__ = [
    "analytics",
    "auth",
    "goals",
    "system",
]
