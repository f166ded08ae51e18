"""Routes for the hangout blueprint."""

from flask import current_app, jsonify, request

from hanghive.constants import FILTER_ALL, HANGOUT_FILTERS
from hanghive.errors import ValidationError
from hanghive.extensions import get_store
from hanghive.group.services import GroupService
from hanghive.utils import get_payload

from . import bp
from .services import HangoutService


@bp.route("/<string:group_id>/hangouts", methods=["GET"])
def list_hangouts(group_id):
    """List a group's hangouts with their status, nearest date first."""
    when = request.args.get("filter", FILTER_ALL)
    if when not in HANGOUT_FILTERS:
        raise ValidationError("Invalid filter. Must be: all, upcoming, or past")

    hangouts = HangoutService.list_hangouts(
        get_store().load(), group_id, when=when, search=request.args.get("search")
    )
    return jsonify({"hangouts": hangouts})


@bp.route("/<string:group_id>/hangouts", methods=["POST"])
def create_hangout(group_id):
    """Propose a new hangout in a group."""
    payload = get_payload()
    with get_store().transaction() as data:
        hangout = HangoutService.propose(
            data, group_id, payload, payload.get("proposedBy")
        )
        hangouts = GroupService.get_group(data, group_id)["hangouts"]

    current_app.logger.info(f"Hangout created in {group_id}: {hangout['title']}")
    return jsonify({"success": True, "hangout": hangout, "hangouts": hangouts})


@bp.route("/<string:group_id>/hangouts/<string:hangout_id>/respond", methods=["POST"])
def respond_to_hangout(group_id, hangout_id):
    """Record whether a member is going, maybe going, or not going."""
    payload = get_payload()
    username = payload.get("username")
    response = payload.get("response")
    with get_store().transaction() as data:
        hangout = HangoutService.respond(data, group_id, hangout_id, username, response)

    current_app.logger.info(
        f'{username} responded "{response}" to: {hangout["title"]}'
    )
    return jsonify({"success": True, "hangout": hangout})


@bp.route("/<string:group_id>/hangouts/<string:hangout_id>", methods=["DELETE"])
def delete_hangout(group_id, hangout_id):
    """Delete a hangout on behalf of its proposer."""
    username = get_payload().get("username") or request.args.get("username")
    with get_store().transaction() as data:
        hangout = HangoutService.delete(data, group_id, hangout_id, username)

    current_app.logger.info(f"Hangout deleted: {hangout['title']}")
    return jsonify({"success": True})
