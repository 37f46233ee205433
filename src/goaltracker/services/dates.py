"""Calendar-day helpers shared by the streak and analytics services.

All comparisons happen on local wall-clock values. A naive timestamp is taken
to already be local; an aware one is shifted into the reference timezone when
one is configured and otherwise read on its own wall clock. Nothing here
converts to UTC, which would move day boundaries for users east or west of it.
"""

from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from typing import Union

Timestamp = Union[datetime, date]


def to_local(timestamp: Timestamp, tz: tzinfo | None = None) -> datetime:
    """Return a naive datetime on the reference wall clock."""

    if not isinstance(timestamp, datetime):
        return datetime.combine(timestamp, time.min)
    if timestamp.tzinfo is not None and tz is not None:
        timestamp = timestamp.astimezone(tz)
    return timestamp.replace(tzinfo=None)


def normalize(timestamp: Timestamp, tz: tzinfo | None = None) -> date:
    """Collapse a timestamp to its calendar day."""

    return to_local(timestamp, tz).date()


def coerce_timestamp(value: object) -> Timestamp | None:
    """Best-effort conversion of stored values; ``None`` when unusable."""

    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return parse_deadline(value)
        except ValueError:
            return None
    return None


def parse_deadline(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string.

    Date-only strings (``YYYY-MM-DD``) become local midnight rather than UTC
    midnight. A trailing ``Z`` is accepted.

    Raises:
        ValueError: if the string is not ISO-8601
    """

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def day_label(day: date) -> str:
    """Short label such as ``Aug 3``."""

    return day.strftime("%b %d").replace(" 0", " ")


def month_label(day: date) -> str:
    """Label such as ``Aug 2024``."""

    return day.strftime("%b %Y")


def add_months(day: date, months: int) -> date:
    """Return the first day of the month ``months`` away from ``day``'s month."""

    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


__all__ = [
    "Timestamp",
    "add_months",
    "coerce_timestamp",
    "day_label",
    "month_label",
    "normalize",
    "parse_deadline",
    "to_local",
]
