"""Tests for registration, login and token handling."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from goaltracker.errors import InvalidCredentials, Unauthorized, UserExists, ValidationFailed
from goaltracker.infra.repositories import InMemoryUserRepository
from goaltracker.services.auth import (
    REFRESH_TOKEN,
    authenticate,
    decode_token,
    issue_tokens,
    register_user,
)

SECRET = "unit-test-secret"


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def alex(users):
    return register_user(name=" Alex ", email=" Alex@Example.COM ", password="secret-pass", users=users)


class TestRegister:
    def test_normalizes_and_hashes(self, alex):
        assert alex.id is not None
        assert alex.name == "Alex"
        assert alex.email == "alex@example.com"
        assert alex.password_hash != "secret-pass"
        assert alex.password_hash.startswith("$argon2")

    def test_duplicate_email_rejected(self, users, alex):
        with pytest.raises(UserExists) as excinfo:
            register_user(name="Other", email="ALEX@example.com", password="another-pass", users=users)
        assert excinfo.value.status_code == 400
        assert excinfo.value.code == "USER_EXISTS"

    def test_short_password_rejected(self, users):
        with pytest.raises(ValidationFailed):
            register_user(name="Sam", email="sam@example.com", password="abc", users=users)

    def test_missing_name_rejected(self, users):
        with pytest.raises(ValidationFailed):
            register_user(name="  ", email="sam@example.com", password="secret-pass", users=users)

    def test_duplicate_saved_between_check_and_insert(self, users, alex, monkeypatch):
        """A concurrent registration that slips past the lookup still maps to USER_EXISTS."""
        monkeypatch.setattr(users, "get_by_email", lambda email: None)

        with pytest.raises(UserExists):
            register_user(name="Twin", email="alex@example.com", password="another-pass", users=users)


class TestAuthenticate:
    def test_valid_credentials(self, users, alex):
        user = authenticate(email="ALEX@example.com", password="secret-pass", users=users)
        assert user.id == alex.id

    def test_wrong_password(self, users, alex):
        with pytest.raises(InvalidCredentials) as excinfo:
            authenticate(email="alex@example.com", password="wrong-pass", users=users)
        assert excinfo.value.status_code == 401

    def test_unknown_email(self, users):
        with pytest.raises(InvalidCredentials):
            authenticate(email="ghost@example.com", password="secret-pass", users=users)


class TestTokens:
    def test_access_token_round_trip(self, alex):
        tokens = issue_tokens(alex, secret=SECRET)
        assert decode_token(tokens.access_token, secret=SECRET) == alex.id

    def test_refresh_token_is_not_an_access_token(self, alex):
        tokens = issue_tokens(alex, secret=SECRET)

        assert decode_token(tokens.refresh_token, secret=SECRET, expected_type=REFRESH_TOKEN) == alex.id
        with pytest.raises(Unauthorized):
            decode_token(tokens.refresh_token, secret=SECRET)

    def test_token_lifetimes(self, alex):
        issued = datetime(2024, 8, 24, 12, tzinfo=timezone.utc)
        tokens = issue_tokens(alex, secret=SECRET, now=issued)
        options = {"verify_exp": False}

        access = jwt.decode(tokens.access_token, SECRET, algorithms=["HS256"], options=options)
        refresh = jwt.decode(tokens.refresh_token, SECRET, algorithms=["HS256"], options=options)

        assert access["sub"] == str(alex.id)
        assert access["exp"] - access["iat"] == int(timedelta(days=7).total_seconds())
        assert refresh["exp"] - refresh["iat"] == int(timedelta(days=30).total_seconds())

    def test_expired_token_rejected(self, alex):
        issued = datetime.now(timezone.utc) - timedelta(days=8)
        tokens = issue_tokens(alex, secret=SECRET, now=issued)

        with pytest.raises(Unauthorized):
            decode_token(tokens.access_token, secret=SECRET)

    def test_wrong_secret_rejected(self, alex):
        tokens = issue_tokens(alex, secret=SECRET)

        with pytest.raises(Unauthorized):
            decode_token(tokens.access_token, secret="someone-elses-secret")

    def test_garbage_token_rejected(self):
        with pytest.raises(Unauthorized):
            decode_token("not.a.token", secret=SECRET)
