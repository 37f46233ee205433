"""Application errors and their JSON rendering."""

from __future__ import annotations

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from .logging_config import get_logger

logger = get_logger("errors")


class ApiError(Exception):
    """Base error carrying an HTTP status and a stable error code."""

    status_code = 400
    code = "BAD_REQUEST"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict[str, str]:
        return {"error": self.code, "message": self.message}


class ValidationFailed(ApiError):
    code = "VALIDATION_ERROR"


class InvalidId(ApiError):
    code = "INVALID_ID"


class UserExists(ApiError):
    code = "USER_EXISTS"


class Unauthorized(ApiError):
    status_code = 401
    code = "UNAUTHORIZED"


class InvalidCredentials(ApiError):
    status_code = 401
    code = "INVALID_CREDENTIALS"


class NotFound(ApiError):
    status_code = 404
    code = "NOT_FOUND"


def validation_message(exc: ValidationError) -> str:
    """Flatten pydantic errors into one readable sentence."""

    messages = []
    for error in exc.errors(include_url=False):
        loc = ".".join(str(part) for part in error.get("loc", ()))
        msg = error.get("msg", "Invalid value").removeprefix("Value error, ")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return ", ".join(messages)


def register_error_handlers(app: Flask) -> None:
    """Render every error as ``{"error": ..., "message": ...}``."""

    @app.errorhandler(ApiError)
    def _handle_api_error(exc: ApiError):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(ValidationError)
    def _handle_validation_error(exc: ValidationError):
        return jsonify({"error": ValidationFailed.code, "message": validation_message(exc)}), 400

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        code = (exc.name or "error").upper().replace(" ", "_")
        return jsonify({"error": code, "message": exc.description}), exc.code

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception("Unhandled error while serving request")
        return jsonify({"error": "INTERNAL_ERROR", "message": "Internal server error"}), 500


__all__ = [
    "ApiError",
    "InvalidCredentials",
    "InvalidId",
    "NotFound",
    "Unauthorized",
    "UserExists",
    "ValidationFailed",
    "register_error_handlers",
    "validation_message",
]
