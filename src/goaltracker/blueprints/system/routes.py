"""Liveness endpoint."""

from __future__ import annotations

from flask import jsonify

from ..common import current_config
from . import bp


@bp.get("/ping")
def ping():
    """Report that the API is up."""

    return jsonify({"message": current_config().PING_MESSAGE})
