"""Goal form definitions."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ...models.goal import MAX_TIME_ALLOTTED, MIN_TIME_ALLOTTED, GoalPriority, GoalType
from ...services.dates import parse_deadline, to_local

_FORM_CONFIG = ConfigDict(
    str_strip_whitespace=True,
    populate_by_name=True,
    use_enum_values=True,
    extra="ignore",
)


def _coerce_deadline(value: Any) -> Any:
    """Accept ISO strings; a bare ``YYYY-MM-DD`` means local midnight."""

    if isinstance(value, str):
        try:
            return parse_deadline(value)
        except ValueError:
            raise ValueError("Deadline must be an ISO-8601 date or datetime") from None
    return value


def _localize(value: datetime, info: ValidationInfo) -> datetime:
    """Shift aware deadlines into the reference timezone passed as ``context['tz']``."""

    tz = (info.context or {}).get("tz")
    return to_local(value, tz)


class GoalForm(BaseModel):
    """Payload for creating a goal; every field except priority is required."""

    model_config = _FORM_CONFIG

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)
    category: str = Field(min_length=1, max_length=100)
    type: GoalType
    priority: GoalPriority = GoalPriority.MEDIUM.value  # type: ignore[assignment]
    time_allotted: int = Field(
        alias="timeAllotted", ge=MIN_TIME_ALLOTTED, le=MAX_TIME_ALLOTTED
    )
    deadline: datetime

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_deadline_value(cls, value: Any) -> Any:
        return _coerce_deadline(value)

    @field_validator("deadline")
    @classmethod
    def localize_deadline(cls, value: datetime, info: ValidationInfo) -> datetime:
        """Store deadlines as naive wall-clock values."""

        return _localize(value, info)


class GoalUpdateForm(BaseModel):
    """Partial update; omitted or null fields are left untouched."""

    model_config = _FORM_CONFIG

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    type: Optional[GoalType] = None
    priority: Optional[GoalPriority] = None
    time_allotted: Optional[int] = Field(
        default=None, alias="timeAllotted", ge=MIN_TIME_ALLOTTED, le=MAX_TIME_ALLOTTED
    )
    deadline: Optional[datetime] = None
    completed: Optional[bool] = None

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_deadline_value(cls, value: Any) -> Any:
        return _coerce_deadline(value)

    @field_validator("deadline")
    @classmethod
    def localize_deadline(
        cls, value: Optional[datetime], info: ValidationInfo
    ) -> Optional[datetime]:
        return _localize(value, info) if value is not None else None

    def changes(self) -> dict[str, Any]:
        """Return only the fields the client actually supplied."""

        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


__all__ = ["GoalForm", "GoalUpdateForm"]
