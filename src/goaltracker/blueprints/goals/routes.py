"""Goal CRUD and streak routes."""

from __future__ import annotations

from flask import g, jsonify, request

from ...extensions import get_goal_repository
from ...services import goals as goal_service
from ...services.streaks import compute_period_streaks
from ..common import current_config, login_required, parse_json, reference_now
from . import bp
from .forms import GoalForm, GoalUpdateForm


@bp.get("")
@login_required
def list_goals():
    """List the caller's goals, newest first."""

    goals = goal_service.list_goals(
        get_goal_repository(),
        g.user_id,
        goal_type=request.args.get("type"),
        category=request.args.get("category"),
        completed=request.args.get("completed"),
    )
    return jsonify({"goals": [goal.to_dict() for goal in goals], "total": len(goals)})


@bp.post("")
@login_required
def create_goal():
    form = parse_json(GoalForm)
    goal = goal_service.create_goal(
        get_goal_repository(), g.user_id, form.model_dump(), now=reference_now()
    )
    return jsonify(goal.to_dict()), 201


@bp.put("/<goal_id>")
@login_required
def update_goal(goal_id: str):
    """Edit a goal or toggle its completion."""

    parsed_id = goal_service.parse_goal_id(goal_id)
    form = parse_json(GoalUpdateForm)
    goal = goal_service.update_goal(
        get_goal_repository(), g.user_id, parsed_id, form.changes(), now=reference_now()
    )
    return jsonify(goal.to_dict())


@bp.delete("/<goal_id>")
@login_required
def delete_goal(goal_id: str):
    goal_service.delete_goal(get_goal_repository(), g.user_id, goal_service.parse_goal_id(goal_id))
    return jsonify({"success": True})


@bp.get("/streaks")
@login_required
def streaks():
    """Current daily, weekly and monthly streaks."""

    goals = get_goal_repository().find_by_user(g.user_id)
    result = compute_period_streaks(
        goals, reference_now(), tz=current_config().reference_timezone()
    )
    return jsonify(result.to_dict())
