"""Authentication request forms."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Passwords are taken verbatim; names and emails are trimmed by the auth service.


class RegisterForm(BaseModel):
    """Payload for creating an account."""

    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=256)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        """Require something that looks like an address and lower-case it."""

        value = value.strip()
        local, _, domain = value.partition("@")
        if not local or "." not in domain:
            raise ValueError("Please provide a valid email address")
        return value.lower()


class LoginForm(BaseModel):
    """Payload for exchanging credentials for tokens."""

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=256)


class RefreshForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str = Field(alias="refreshToken", min_length=1)


__all__ = ["LoginForm", "RefreshForm", "RegisterForm"]
