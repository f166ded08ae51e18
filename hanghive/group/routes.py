"""Routes for the group blueprint."""

from flask import current_app, jsonify, request

from hanghive.extensions import get_store
from hanghive.utils import get_payload

from . import bp
from .services import GroupService


@bp.route("", methods=["GET"])
def list_groups():
    """List groups, only the ones a user belongs to when ``username`` is given."""
    data = get_store().load()
    groups = GroupService.list_groups(
        data,
        username=request.args.get("username"),
        search=request.args.get("search"),
    )
    return jsonify({"groups": groups})


@bp.route("/<string:group_id>", methods=["GET"])
def view_group(group_id):
    """Return a single group."""
    group = GroupService.get_group(get_store().load(), group_id)
    return jsonify({"group": group})


@bp.route("", methods=["POST"])
def create_group():
    """Create a group with its creator as the only member."""
    payload = get_payload()
    with get_store().transaction() as data:
        group = GroupService.create_group(
            data,
            payload.get("name"),
            payload.get("createdBy"),
            code_attempts=current_app.config["GROUP_CODE_ATTEMPTS"],
        )

    current_app.logger.info(f"Group created: {group['name']} ({group['code']})")
    return jsonify({"success": True, "group": group})


@bp.route("/join", methods=["POST"])
def join_group():
    """Join a group by its share code."""
    payload = get_payload()
    username = payload.get("username")
    with get_store().transaction() as data:
        group = GroupService.join_group(data, payload.get("code"), username)

    current_app.logger.info(f"{username} joined group: {group['name']}")
    return jsonify({"success": True, "group": group})


@bp.route("/<string:group_id>/leave", methods=["POST"])
def leave_group(group_id):
    """Leave a group, deleting it if it becomes empty."""
    username = get_payload().get("username")
    with get_store().transaction() as data:
        deleted = GroupService.leave_group(data, group_id, username)

    if deleted:
        current_app.logger.info(f"Group deleted (no members): {group_id}")
    else:
        current_app.logger.info(f"{username} left group: {group_id}")
    return jsonify({"success": True, "deleted": deleted})
