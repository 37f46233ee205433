"""Analytics routes."""

from __future__ import annotations

from flask import g, jsonify

from ...errors import NotFound
from ...extensions import get_goal_repository, get_user_repository
from ...logging_config import get_logger
from ...services.analytics import compute_analytics
from ..common import current_config, login_required, reference_now
from . import bp

logger = get_logger("blueprints.analytics")


@bp.get("")
@login_required
def analytics():
    """Return completion rate, streaks, category breakdown and trends."""

    user = get_user_repository().get(g.user_id)
    if user is None:
        raise NotFound("User not found", code="USER_NOT_FOUND")

    goals = get_goal_repository().find_by_user(user.id)
    summary = compute_analytics(
        goals, reference_now(), tz=current_config().reference_timezone()
    )
    logger.info(
        "Analytics served",
        extra={"user_id": user.id, "total_goals": summary.total_goals},
    )
    return jsonify(summary.to_dict())
