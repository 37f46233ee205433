"""Request helpers shared by the JSON blueprints."""

from __future__ import annotations

from datetime import datetime
from functools import wraps
from typing import Callable, TypeVar

from flask import current_app, g, request
from pydantic import BaseModel

from ..config import BaseConfig
from ..errors import Unauthorized, ValidationFailed
from ..services.auth import decode_token
from ..services.dates import to_local

FormT = TypeVar("FormT", bound=BaseModel)


def current_config() -> BaseConfig:
    return current_app.config["GOALTRACKER_CONFIG"]


def reference_now() -> datetime:
    """Current wall-clock time in the configured reference timezone (naive)."""

    tz = current_config().reference_timezone()
    if tz is None:
        return datetime.now()
    return to_local(datetime.now(tz), tz)


def parse_json(form_cls: type[FormT]) -> FormT:
    """Validate the JSON request body against a pydantic form.

    The reference timezone is handed to validators as ``context["tz"]``.
    """

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationFailed("Request body must be a JSON object")
    return form_cls.model_validate(
        payload, context={"tz": current_config().reference_timezone()}
    )


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        raise Unauthorized("Authentication required")
    return header[len("Bearer "):].strip()


def login_required(view: Callable) -> Callable:
    """Require a valid access token and expose the caller as ``g.user_id``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        g.user_id = decode_token(bearer_token(), secret=current_config().SECRET_KEY)
        return view(*args, **kwargs)

    return wrapper
