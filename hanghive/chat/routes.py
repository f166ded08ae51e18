"""Routes for the chat blueprint."""

from flask import jsonify

from hanghive.extensions import get_store
from hanghive.utils import get_payload

from . import bp
from .services import ChatService


@bp.route("/<string:group_id>/messages", methods=["GET"])
def list_messages(group_id):
    """Return every message of a group's chat."""
    messages = ChatService.list_messages(get_store().load(), group_id)
    return jsonify({"messages": messages})


@bp.route("/<string:group_id>/messages", methods=["POST"])
def send_message(group_id):
    """Send a chat message to a group."""
    payload = get_payload()
    with get_store().transaction() as data:
        message = ChatService.send_message(
            data, group_id, payload.get("text"), payload.get("sender")
        )
        messages = ChatService.list_messages(data, group_id)

    return jsonify({"success": True, "message": message, "messages": messages})


@bp.route("/<string:group_id>/messages/<string:message_id>/react", methods=["POST"])
def react_to_message(group_id, message_id):
    """Toggle a user's emoji reaction on a message."""
    payload = get_payload()
    with get_store().transaction() as data:
        message = ChatService.toggle_reaction(
            data, group_id, message_id, payload.get("username"), payload.get("emoji")
        )

    return jsonify({"success": True, "message": message})
