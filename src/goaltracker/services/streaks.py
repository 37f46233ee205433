"""Streak calculations over a user's goal history."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Iterable, Optional

from ..logging_config import get_logger
from ..models.goal import Goal, GoalType
from .dates import add_months, coerce_timestamp, normalize

logger = get_logger("services.streaks")

WEEKLY_LOOKBACK = 52
MONTHLY_LOOKBACK = 12


def _completion_by_day(
    goals: Iterable[Goal],
    *,
    goal_type: GoalType = GoalType.DAILY,
    bucket: Callable[[date], date] = lambda day: day,
    tz: tzinfo | None = None,
) -> dict[date, bool]:
    """Map each bucket that has goals of ``goal_type`` to whether all are completed."""

    completion: dict[date, bool] = defaultdict(lambda: True)
    for goal in goals:
        if goal.type != goal_type:
            continue
        deadline = coerce_timestamp(goal.deadline)
        if deadline is None:
            logger.warning(
                "Skipping goal with unreadable deadline",
                extra={"goal_id": goal.id, "deadline": goal.deadline},
            )
            continue
        key = bucket(normalize(deadline, tz))
        completion[key] = completion[key] and bool(goal.completed)
    return dict(completion)


def is_day_fully_completed(
    day: date, goals: Iterable[Goal], *, tz: tzinfo | None = None
) -> Optional[bool]:
    """Return whether every daily goal due on ``day`` is completed.

    ``None`` means no daily goals were due that day, which is neither a
    completed day nor a broken one.
    """

    return _completion_by_day(goals, tz=tz).get(day)


def compute_current_streak(
    goals: Iterable[Goal], now: datetime, *, tz: tzinfo | None = None
) -> int:
    """Count consecutive fully completed days ending at or before today.

    Only days that have daily goals are considered, so days without any are
    transparent. Future days are skipped and an unfinished today is left out
    rather than breaking the streak. A day that sits more than one calendar
    day before the previously counted day is still counted, but ends the walk.
    """

    completion = _completion_by_day(goals, tz=tz)
    if not completion:
        return 0

    today = normalize(now, tz)
    streak = 0
    last_counted: date | None = None
    for day in sorted(completion, reverse=True):
        done = completion[day]
        if day > today:
            continue
        if day == today and not done:
            logger.debug("Today incomplete, starting from earlier days", extra={"day": day})
            continue
        if not done:
            logger.debug("Incomplete day ends streak", extra={"day": day, "streak": streak})
            break

        streak += 1
        if last_counted is not None and (last_counted - day).days > 1:
            logger.debug(
                "Gap ends streak",
                extra={"day": day, "gap_days": (last_counted - day).days, "streak": streak},
            )
            break
        last_counted = day

    return streak


def compute_longest_streak(
    goals: Iterable[Goal], now: datetime, *, tz: tzinfo | None = None
) -> int:
    """Return the longest run of back-to-back fully completed days up to today."""

    goals = list(goals)
    completion = _completion_by_day(goals, tz=tz)
    today = normalize(now, tz)

    longest = 0
    run = 0
    previous: date | None = None
    for day in sorted(d for d in completion if d <= today):
        if not completion[day]:
            run = 0
        elif run and previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        previous = day
        longest = max(longest, run)

    return max(longest, compute_current_streak(goals, now, tz=tz))


def week_start(day: date) -> date:
    """Return the Sunday that starts ``day``'s week."""

    return day - timedelta(days=(day.weekday() + 1) % 7)


def month_start(day: date) -> date:
    return day.replace(day=1)


def _walk_periods(
    completion: dict[date, bool],
    current: date,
    previous: Callable[[date], date],
    limit: int,
) -> int:
    streak = 0
    period = current
    for index in range(limit):
        done = completion.get(period)
        if done:
            streak += 1
        elif done is False and index > 0:
            break
        # No goals that period, or the current period is still in progress.
        period = previous(period)
    return streak


@dataclass(slots=True, frozen=True)
class PeriodStreaks:
    """Current streaks per goal cadence."""

    daily: int
    weekly: int
    monthly: int

    def to_dict(self) -> dict[str, int]:
        return {
            "dailyStreak": self.daily,
            "weeklyStreak": self.weekly,
            "monthlyStreak": self.monthly,
        }


def compute_period_streaks(
    goals: Iterable[Goal], now: datetime, *, tz: tzinfo | None = None
) -> PeriodStreaks:
    """Compute daily, weekly and monthly streaks in one pass over the snapshot."""

    goals = list(goals)
    today = normalize(now, tz)

    weekly = _completion_by_day(goals, goal_type=GoalType.WEEKLY, bucket=week_start, tz=tz)
    monthly = _completion_by_day(goals, goal_type=GoalType.MONTHLY, bucket=month_start, tz=tz)

    return PeriodStreaks(
        daily=compute_current_streak(goals, now, tz=tz),
        weekly=_walk_periods(
            weekly, week_start(today), lambda day: day - timedelta(days=7), WEEKLY_LOOKBACK
        ),
        monthly=_walk_periods(
            monthly, month_start(today), lambda day: add_months(day, -1), MONTHLY_LOOKBACK
        ),
    )


__all__ = [
    "PeriodStreaks",
    "compute_current_streak",
    "compute_longest_streak",
    "compute_period_streaks",
    "is_day_fully_completed",
    "month_start",
    "week_start",
]
