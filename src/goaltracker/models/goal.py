"""Goal tracking data structures."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .user import User

MIN_TIME_ALLOTTED = 1
MAX_TIME_ALLOTTED = 1440  # minutes in a day


class GoalType(str, Enum):
    """Cadence a goal is tracked at."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class GoalPriority(str, Enum):
    """Relative importance of a goal."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class Goal(SQLModel, table=True):
    """A user goal due on a given day."""

    __tablename__: ClassVar[str] = "goal"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=200)
    description: str = Field(nullable=False, max_length=1000)
    category: str = Field(nullable=False, max_length=100, index=True)
    type: str = Field(default=GoalType.DAILY.value, nullable=False, max_length=16, index=True)
    priority: str = Field(default=GoalPriority.MEDIUM.value, nullable=False, max_length=16)
    time_allotted: int = Field(default=30, nullable=False)
    # Stored as naive local wall-clock values.
    deadline: datetime = Field(sa_type=DateTime(timezone=False), nullable=False, index=True)
    completed: bool = Field(default=False, nullable=False, index=True)
    completed_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))
    created_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime(timezone=False), nullable=False, index=True
    )
    updated_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime(timezone=False), nullable=False
    )

    user: "User" = Relationship(
        back_populates="goals",
        sa_relationship=relationship("User", back_populates="goals"),
    )

    def to_dict(self) -> dict:
        """Serialize to the camelCase shape clients consume."""

        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "type": self.type,
            "priority": self.priority or GoalPriority.MEDIUM.value,
            "timeAllotted": self.time_allotted,
            "deadline": _isoformat(self.deadline),
            "completed": self.completed,
            "completedAt": _isoformat(self.completed_at),
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }
