"""Goal analytics: completion rate, category breakdown and trend buckets."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from typing import Iterable

from ..logging_config import get_logger
from ..models.goal import Goal
from .dates import add_months, coerce_timestamp, day_label, month_label, to_local
from .streaks import compute_current_streak, compute_longest_streak

logger = get_logger("services.analytics")

UNCATEGORIZED = "Uncategorized"
WEEKLY_BUCKETS = 4
MONTHLY_BUCKETS = 6


def _percentage(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return round(part / whole * 100, 2)


@dataclass(slots=True)
class CategoryStat:
    category: str
    completed: int = 0
    total: int = 0

    @property
    def percentage(self) -> float:
        return _percentage(self.completed, self.total)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "completed": self.completed,
            "total": self.total,
            "percentage": self.percentage,
        }


@dataclass(slots=True)
class TrendBucket:
    """Goals created within ``[start, end)`` (or ``(start, end]`` for weeks)."""

    label: str
    start: datetime
    end: datetime
    completed: int = 0
    total: int = 0


@dataclass(slots=True)
class AnalyticsSummary:
    """Everything the analytics endpoint reports for one user."""

    completion_rate: float = 0.0
    current_streak: int = 0
    longest_streak: int = 0
    goals_completed: int = 0
    total_goals: int = 0
    category_breakdown: list[CategoryStat] = field(default_factory=list)
    weekly_trends: list[TrendBucket] = field(default_factory=list)
    monthly_trends: list[TrendBucket] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to the wire shape existing clients expect."""

        return {
            "completionRate": self.completion_rate,
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "goalsCompleted": self.goals_completed,
            "totalGoals": self.total_goals,
            "categoryBreakdown": [stat.to_dict() for stat in self.category_breakdown],
            "weeklyTrends": [
                {"week": b.label, "completed": b.completed, "total": b.total}
                for b in self.weekly_trends
            ],
            "monthlyTrends": [
                {"month": b.label, "completed": b.completed, "total": b.total}
                for b in self.monthly_trends
            ],
        }


def category_breakdown(goals: Iterable[Goal]) -> list[CategoryStat]:
    """Group goals by category in first-seen order."""

    stats: dict[str, CategoryStat] = {}
    for goal in goals:
        name = (goal.category or "").strip() or UNCATEGORIZED
        stat = stats.setdefault(name, CategoryStat(category=name))
        stat.total += 1
        if goal.completed:
            stat.completed += 1
    return list(stats.values())


def weekly_buckets(now_local: datetime) -> list[TrendBucket]:
    """Trailing 7-day windows ending at ``now_local``, oldest first."""

    buckets: list[TrendBucket] = []
    for offset in reversed(range(WEEKLY_BUCKETS)):
        end = now_local - timedelta(days=7 * offset)
        start = end - timedelta(days=7)
        buckets.append(TrendBucket(label=day_label(start.date()), start=start, end=end))
    return buckets


def monthly_buckets(now_local: datetime) -> list[TrendBucket]:
    """Calendar months ending with the current one, oldest first."""

    current = now_local.date().replace(day=1)
    buckets: list[TrendBucket] = []
    for offset in reversed(range(MONTHLY_BUCKETS)):
        first = add_months(current, -offset)
        start = datetime.combine(first, datetime.min.time())
        end = datetime.combine(add_months(first, 1), datetime.min.time())
        buckets.append(TrendBucket(label=month_label(first), start=start, end=end))
    return buckets


def _fill_trends(
    goals: list[Goal],
    now_local: datetime,
    weeks: list[TrendBucket],
    months: list[TrendBucket],
    tz: tzinfo | None,
) -> None:
    for goal in goals:
        raw = coerce_timestamp(goal.created_at)
        if raw is None:
            logger.warning(
                "Skipping goal with unreadable createdAt in trends",
                extra={"goal_id": goal.id, "created_at": goal.created_at},
            )
            continue
        created = to_local(raw, tz)
        if created > now_local:
            continue
        for bucket in weeks:
            if bucket.start < created <= bucket.end:
                bucket.total += 1
                bucket.completed += int(bool(goal.completed))
                break
        for bucket in months:
            if bucket.start <= created < bucket.end:
                bucket.total += 1
                bucket.completed += int(bool(goal.completed))
                break


def compute_analytics(
    goals: Iterable[Goal], now: datetime, *, tz: tzinfo | None = None
) -> AnalyticsSummary:
    """Build the analytics summary for a snapshot of one user's goals.

    Pure with respect to its inputs: goals are never mutated and the same
    snapshot and ``now`` always yield the same summary. Goals with unreadable
    dates are left out of the date-bucketed figures only.
    """

    goals = list(goals)
    now_local = to_local(now, tz)
    completed = sum(1 for goal in goals if goal.completed)

    weeks = weekly_buckets(now_local)
    months = monthly_buckets(now_local)
    _fill_trends(goals, now_local, weeks, months, tz)

    summary = AnalyticsSummary(
        completion_rate=_percentage(completed, len(goals)),
        current_streak=compute_current_streak(goals, now, tz=tz),
        longest_streak=compute_longest_streak(goals, now, tz=tz),
        goals_completed=completed,
        total_goals=len(goals),
        category_breakdown=category_breakdown(goals),
        weekly_trends=weeks,
        monthly_trends=months,
    )
    logger.debug(
        "Analytics computed",
        extra={
            "total_goals": summary.total_goals,
            "current_streak": summary.current_streak,
            "completion_rate": summary.completion_rate,
        },
    )
    return summary


__all__ = [
    "AnalyticsSummary",
    "CategoryStat",
    "TrendBucket",
    "category_breakdown",
    "compute_analytics",
    "monthly_buckets",
    "weekly_buckets",
]
