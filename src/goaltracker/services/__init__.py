"""Domain services: streaks, analytics, goals and authentication."""

from .analytics import AnalyticsSummary, compute_analytics
from .streaks import (
    PeriodStreaks,
    compute_current_streak,
    compute_longest_streak,
    compute_period_streaks,
    is_day_fully_completed,
)

__all__ = [
    "AnalyticsSummary",
    "PeriodStreaks",
    "compute_analytics",
    "compute_current_streak",
    "compute_longest_streak",
    "compute_period_streaks",
    "is_day_fully_completed",
]
