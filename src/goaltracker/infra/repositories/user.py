"""SQLModel implementation of User repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...errors import UserExists
from ...models.user import User
from ..database import SessionFactory


class SQLModelUserRepository:
    """SQLModel-based user repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self, user_id: int) -> Optional[User]:
        with self.session_factory() as session:
            obj = session.get(User, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def get_by_email(self, email: str) -> Optional[User]:
        with self.session_factory() as session:
            obj = session.exec(select(User).where(User.email == email)).first()
            if obj:
                session.expunge(obj)
            return obj

    def save(self, user: User) -> User:
        """Insert or update a user; a taken email raises ``UserExists``."""
        with self.session_factory() as session:
            stored = user if user.id is None else session.merge(user)
            session.add(stored)
            try:
                session.commit()
            except IntegrityError as exc:
                raise UserExists("User with this email already exists") from exc
            session.refresh(stored)
            session.expunge(stored)
            return stored
