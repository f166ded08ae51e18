"""Routes for the user blueprint."""

from flask import current_app, jsonify

from hanghive.extensions import get_store
from hanghive.utils import get_payload

from . import bp
from .services import UserService


@bp.route("/login", methods=["POST"])
def login():
    """Log in as a username, creating the user the first time."""
    payload = get_payload()
    with get_store().transaction() as data:
        user, created = UserService.login(data, payload.get("username"))

    if created:
        current_app.logger.info(f"New user created: {user['username']}")
    else:
        current_app.logger.info(f"User logged in: {user['username']}")
    return jsonify({"success": True, "user": user})
