"""
API gateway: combines the users and events blueprints.
This is the local entrypoint for development.
"""

import atexit
import logging
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from backend import config
from backend.database.db_connection import Database
from backend.errors import register_error_handlers
from backend.events_service.ledger import EventLedger
from backend.events_service.routes import events_bp
from backend.users_service.directory import UserDirectory
from backend.users_service.routes import users_bp
from backend.users_service.security import CredentialHasher
from backend.workflow import AccountWorkflow

# Basic console logging during API requests
logging.basicConfig(level=config.LOG_LEVEL, format="[%(levelname)s] %(asctime)s - %(message)s")


def build_workflow(db: Database) -> AccountWorkflow:
    """
    Wire the directory, ledger and hasher around one storage handle.

    Args:
        db (Database): The process-wide connection pool.

    Returns:
        AccountWorkflow: Ready to be installed on an app.
    """
    return AccountWorkflow(db, UserDirectory(db), EventLedger(db), CredentialHasher())


def create_app(workflow: Optional[AccountWorkflow] = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        workflow (AccountWorkflow, optional): Pre-built workflow. When omitted,
            a connection pool is opened from DATABASE_URL and closed at exit.

    Returns:
        Flask: The configured Flask application.
    """
    app = Flask(__name__)
    CORS(app, resources={
        r"/api/*": {
            "origins": config.cors_origins(),
            "methods": ["GET", "POST", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type"],
        }
    })

    if workflow is None:
        db = Database.from_env()
        atexit.register(db.close)
        workflow = build_workflow(db)
    app.extensions["accounts"] = workflow

    # --- REGISTER BLUEPRINTS ---
    app.register_blueprint(users_bp, url_prefix="/api/users")
    app.register_blueprint(events_bp, url_prefix="/api/events")
    register_error_handlers(app)
    logging.info("All blueprints registered successfully.")

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping():
        """
        Root URL for simple 'online' check.
        """
        return jsonify({"status": "gateway_ok"}), 200

    @app.route("/health")
    def health():
        """
        Health check endpoint.
        """
        return jsonify({"status": "ok"}), 200

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=config.PORT)
