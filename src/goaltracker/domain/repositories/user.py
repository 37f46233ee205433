"""User repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.user import User


class UserRepository(Protocol):
    """Repository for managing registered users."""

    def get(self, user_id: int) -> Optional[User]:
        """Retrieve a user by ID."""
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by normalized email."""
        ...

    def save(self, user: User) -> User:
        """Insert or update a user; raises ``UserExists`` when the email is taken."""
        ...
