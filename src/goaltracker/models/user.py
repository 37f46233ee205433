"""User model supporting authentication."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .goal import Goal


class User(SQLModel, table=True):
    """Registered application user."""

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=100)
    email: str = Field(nullable=False, unique=True, index=True, max_length=255)
    password_hash: str = Field(nullable=False, max_length=255)
    created_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime(timezone=False), nullable=False
    )
    updated_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime(timezone=False), nullable=False
    )

    goals: list["Goal"] = Relationship(
        back_populates="user",
        sa_relationship=relationship("Goal", back_populates="user"),
    )

    def to_dict(self) -> dict:
        """Return the public representation (never the password hash)."""

        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
