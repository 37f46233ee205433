"""Account registration, login and token routes."""

from __future__ import annotations

from flask import g, jsonify

from ...errors import Unauthorized
from ...extensions import get_user_repository
from ...models.user import User
from ...services import auth as auth_service
from ..common import current_config, login_required, parse_json
from . import bp
from .forms import LoginForm, RefreshForm, RegisterForm


def _auth_payload(user: User) -> dict:
    config = current_config()
    tokens = auth_service.issue_tokens(
        user,
        secret=config.SECRET_KEY,
        access_days=config.ACCESS_TOKEN_DAYS,
        refresh_days=config.REFRESH_TOKEN_DAYS,
    )
    return {
        "user": user.to_dict(),
        "accessToken": tokens.access_token,
        "refreshToken": tokens.refresh_token,
    }


@bp.post("/register")
def register():
    """Create an account and sign the new user in."""

    form = parse_json(RegisterForm)
    user = auth_service.register_user(
        name=form.name,
        email=form.email,
        password=form.password,
        users=get_user_repository(),
    )
    return jsonify(_auth_payload(user)), 201


@bp.post("/login")
def login():
    form = parse_json(LoginForm)
    user = auth_service.authenticate(
        email=form.email, password=form.password, users=get_user_repository()
    )
    return jsonify(_auth_payload(user))


@bp.post("/refresh")
def refresh():
    """Trade a refresh token for a new token pair."""

    form = parse_json(RefreshForm)
    user_id = auth_service.decode_token(
        form.refresh_token,
        secret=current_config().SECRET_KEY,
        expected_type=auth_service.REFRESH_TOKEN,
    )
    user = get_user_repository().get(user_id)
    if user is None:
        raise Unauthorized("User not found")
    return jsonify(_auth_payload(user))


@bp.get("/me")
@login_required
def me():
    user = get_user_repository().get(g.user_id)
    if user is None:
        raise Unauthorized("User not found")
    return jsonify(user.to_dict())
