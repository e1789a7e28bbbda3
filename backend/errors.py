"""
Error taxonomy shared by the storage layer, the account workflow and the routes.

Each error carries the HTTP status and the outward message used when it
reaches the request boundary. `register_error_handlers` installs the Flask
handlers that turn them into JSON responses.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException


class ServiceError(Exception):
    """Base class for every failure surfaced to API callers."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationFailure(ServiceError):
    """Missing or malformed request fields."""

    status_code = 400
    message = "Invalid request"

    def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, str]]] = None) -> None:
        super().__init__(message)
        self.details = details or []

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.details:
            body["details"] = self.details
        return body


class NotFound(ServiceError):
    status_code = 404
    message = "Not found"


class DuplicateEmail(ServiceError):
    status_code = 400
    message = "Email already in use"


# Name used by the registration flow
EmailInUse = DuplicateEmail


class InvalidCredentials(ServiceError):
    """Unknown email or wrong password; the two are never told apart."""

    status_code = 401
    message = "Invalid email or password"


class InvalidPassword(ServiceError):
    status_code = 401
    message = "Invalid password"


class HashingError(ServiceError):
    message = "Password hashing failed"


class InternalStorageError(ServiceError):
    message = "Internal server error"


def register_error_handlers(app: Flask) -> None:
    """
    Attach JSON error handlers for the whole application.

    Args:
        app (Flask): The application to configure.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(error: ServiceError) -> Tuple[Response, int]:
        if error.status_code >= 500:
            logging.error(f"[Gateway] {type(error).__name__}: {error.message}", exc_info=error.__cause__)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException) -> Tuple[Response, int, List[Tuple[str, str]]]:
        # Keep werkzeug's headers (e.g. Allow on 405); the body is JSON now
        headers = [(name, value) for name, value in error.get_headers() if name.lower() != "content-type"]
        return jsonify({"error": error.description}), error.code or 500, headers

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception) -> Tuple[Response, int]:
        logging.exception(f"[Gateway] Unhandled error: {error}")
        return jsonify({"error": "Internal server error"}), 500
