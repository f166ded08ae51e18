"""Initialize the Flask app and its extensions."""

import json
import os

import firebase_admin
from firebase_admin import credentials
from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from .extensions import init_store


def init_firebase(app):
    """Initialize the Firebase Admin SDK for the Firestore storage backend."""
    cred = None
    project_id = None

    # First, try to load from environment variable (for production)
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            cred_info = json.loads(cred_json)
            project_id = cred_info.get("project_id")
            cred = credentials.Certificate(cred_info)
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    # If env var fails or is not present, try loading from file (for local dev)
    if not cred:
        cred_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
        )
        if os.path.exists(cred_path):
            try:
                with open(cred_path, "r") as f:
                    cred_info = json.load(f)
                project_id = cred_info.get("project_id")
                cred = credentials.Certificate(cred_path)
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error loading credentials from file: {e}")

    # If both methods fail, fallback to default credentials
    if not cred:
        try:
            cred = credentials.ApplicationDefault()
            project_id = os.environ.get("FIREBASE_PROJECT_ID")
        except Exception as e:
            app.logger.error(
                f"Could not find any valid credentials (env, file, or default): {e}"
            )

    if cred and not firebase_admin._apps:
        try:
            options = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(cred, options)
        except ValueError:
            # This can happen if the app is already initialized, which is fine.
            app.logger.info("Firebase app already initialized.")


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        STORAGE_BACKEND=(os.environ.get("HANGHIVE_STORAGE") or "json").lower(),
        DATA_FILE=os.environ.get("HANGHIVE_DATA_FILE"),
        GROUP_CODE_ATTEMPTS=int(os.environ.get("HANGHIVE_CODE_ATTEMPTS") or 20),
        APP_VERSION=os.environ.get("APP_VERSION", "dev"),
    )

    if test_config:
        app.config.update(test_config)

    if app.config["STORAGE_BACKEND"] == "firestore" and not app.config.get("TESTING"):
        init_firebase(app)

    # Ensure the instance folder exists
    os.makedirs(app.instance_path, exist_ok=True)

    init_store(app)

    # Register blueprints
    from . import user as user_bp

    app.register_blueprint(user_bp.bp)

    from . import group as group_bp

    app.register_blueprint(group_bp.bp)

    from . import hangout as hangout_bp

    app.register_blueprint(hangout_bp.bp)

    from . import chat as chat_bp

    app.register_blueprint(chat_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.after_request
    def allow_cross_origin(response):
        """Let browser clients on any origin call the API."""
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, DELETE, OPTIONS"
        return response

    @app.route("/health")
    def health_check():
        """Perform a simple health check."""
        return "OK", 200

    @app.route("/")
    def index():
        """Describe the running service."""
        return {"name": "Hang Hive", "version": app.config["APP_VERSION"]}

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
