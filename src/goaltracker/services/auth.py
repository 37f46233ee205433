"""Authentication and user management services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from ..domain.repositories import UserRepository
from ..errors import InvalidCredentials, Unauthorized, UserExists, ValidationFailed
from ..logging_config import get_logger
from ..models.user import User

logger = get_logger("services.auth")

_hasher = PasswordHasher()
MIN_PASSWORD_LENGTH = 6
ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"
JWT_ALGORITHM = "HS256"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def register_user(*, name: str, email: str, password: str, users: UserRepository) -> User:
    """Create a new user with a hashed password."""

    name = name.strip()
    email = normalize_email(email)
    if not name or not email or not password:
        raise ValidationFailed("Name, email, and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if users.get_by_email(email) is not None:
        raise UserExists("User with this email already exists")

    user = users.save(User(name=name, email=email, password_hash=_hasher.hash(password)))
    logger.info("User registered", extra={"user_id": user.id})
    return user


def authenticate(*, email: str, password: str, users: UserRepository) -> User:
    """Validate credentials and return the matching user."""

    email = normalize_email(email)
    if not email or not password:
        raise ValidationFailed("Email and password are required")

    user = users.get_by_email(email)
    if user is None:
        raise InvalidCredentials("Invalid email or password")
    try:
        _hasher.verify(user.password_hash, password)
    except (VerifyMismatchError, InvalidHash, VerificationError):
        logger.info("Rejected login", extra={"user_id": user.id})
        raise InvalidCredentials("Invalid email or password") from None

    if _hasher.check_needs_rehash(user.password_hash):
        user.password_hash = _hasher.hash(password)
        user = users.save(user)
    return user


@dataclass(slots=True, frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def _encode(user_id: int, token_type: str, lifetime: timedelta, secret: str, now: datetime) -> str:
    payload = {
        "sub": str(user_id),
        "type": token_type,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def issue_tokens(
    user: User,
    *,
    secret: str,
    access_days: int = 7,
    refresh_days: int = 30,
    now: datetime | None = None,
) -> TokenPair:
    """Return signed access and refresh tokens for the user."""

    if user.id is None:
        raise ValueError("Cannot issue tokens for an unsaved user")
    now = now or datetime.now(timezone.utc)
    return TokenPair(
        access_token=_encode(user.id, ACCESS_TOKEN, timedelta(days=access_days), secret, now),
        refresh_token=_encode(user.id, REFRESH_TOKEN, timedelta(days=refresh_days), secret, now),
    )


def decode_token(token: str, *, secret: str, expected_type: str = ACCESS_TOKEN) -> int:
    """Verify a token and return the user id it was issued for."""

    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as exc:
        raise Unauthorized("Invalid or expired token") from exc

    if payload.get("type") != expected_type:
        raise Unauthorized("Invalid or expired token")
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise Unauthorized("Invalid or expired token") from exc


__all__ = [
    "ACCESS_TOKEN",
    "MIN_PASSWORD_LENGTH",
    "REFRESH_TOKEN",
    "TokenPair",
    "authenticate",
    "decode_token",
    "issue_tokens",
    "normalize_email",
    "register_user",
]
