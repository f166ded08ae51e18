from flask import Blueprint, current_app, jsonify

from .errors import (
    AppError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from .store import StorageError

error_handlers_bp = Blueprint("error_handlers", __name__)


def error_response(message, status_code):
    return jsonify({"error": message}), status_code


@error_handlers_bp.app_errorhandler(ValidationError)
def handle_validation_error(error):
    """Handles missing or invalid request fields."""
    current_app.logger.warning(f"Validation Error: {error.message}")
    return error_response(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(NotFoundError)
def handle_not_found_error(error):
    """Handles unknown groups, hangouts, messages and codes."""
    current_app.logger.warning(f"Not Found Error: {error.message}")
    return error_response(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(ConflictError)
def handle_conflict_error(error):
    """Handles duplicate memberships and code collisions."""
    current_app.logger.warning(f"Conflict Error: {error.message}")
    return error_response(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(ForbiddenError)
def handle_forbidden_error(error):
    """Handles attempts to change someone else's hangout."""
    current_app.logger.warning(f"Forbidden Error: {error.message}")
    return error_response(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles generic application errors."""
    current_app.logger.error(f"Application Error: {error.message}")
    return error_response(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(StorageError)
def handle_storage_error(e):
    """Handles failures reading or writing the database."""
    current_app.logger.error(f"Storage Error: {e}")
    # Avoid exposing file paths to the client
    return error_response("A storage error occurred. Please try again later.", 500)


@error_handlers_bp.app_errorhandler(404)
def handle_404(e):
    """Handles generic 404 errors for routes that don't exist."""
    return error_response("Not found", 404)


@error_handlers_bp.app_errorhandler(405)
def handle_405(e):
    """Handles requests with an unsupported method."""
    return error_response("Method not allowed", 405)


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return error_response("Internal server error", 500)
