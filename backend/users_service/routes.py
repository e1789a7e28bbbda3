"""
Users service route handlers.

Provides routes for:
- User registration
- User login
- Identity verification (email + birth date)
- Password reset
- Account deletion (with password confirmation)

Request bodies are validated by `users_service.schemas`; all account rules
live in `backend.workflow.AccountWorkflow`. Errors raised there are rendered
by the handlers in `backend.errors`.
"""

import logging
from typing import Tuple

from flask import Blueprint, Response, current_app, jsonify, request

from backend.users_service.schemas import (
    DeleteAccountRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyIdentityRequest,
)
from backend.validation import parse_payload
from backend.workflow import AccountWorkflow

users_bp = Blueprint("users", __name__)


def _workflow() -> AccountWorkflow:
    return current_app.extensions["accounts"]


# --- REQUEST LOGGING ---
@users_bp.before_request
def before_request() -> None:
    """Log method and path of every request (bodies hold passwords and are never logged)."""
    logging.info(f"[Users] Incoming {request.method} {request.path}")


@users_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Users] Response {response.status}")
    return response


# --- REGISTER ---
@users_bp.route("/register", methods=["POST"])
def register() -> Tuple[Response, int]:
    """
    Register a new user.

    Expects a JSON body with:
    - name (str)
    - email (str): Unique, compared case-sensitively.
    - password (str)
    - birthDate (str): ISO date, e.g. "1990-05-17".

    Returns:
        201: Confirmation message (no user data, no hash).
        400: Missing fields or email already in use.
        500: Hashing or database error.
    """
    body = parse_payload(RegisterRequest, request.get_json(silent=True))
    _workflow().register(body.name, body.email, body.password, body.birth_date)
    return jsonify({"message": "User created successfully"}), 201


# --- LOGIN ---
@users_bp.route("/login", methods=["POST"])
def login() -> Tuple[Response, int]:
    """
    Authenticate a user.

    Expects a JSON body with:
    - email (str)
    - password (str)

    Returns:
        200: {id, name, email}
        400: Missing credentials.
        401: Invalid credentials (wrong password or unknown email, same response).
    """
    body = parse_payload(LoginRequest, request.get_json(silent=True))
    user = _workflow().login(body.email, body.password)
    return jsonify(user), 200


# --- VERIFY IDENTITY ---
@users_bp.route("/verify-identity", methods=["POST"])
def verify_identity() -> Tuple[Response, int]:
    """
    First step of a password reset: match email and birth date.

    Returns:
        200: {userId} to pass to /reset-password.
        400: Missing fields.
        404: No account matches both values.
    """
    body = parse_payload(VerifyIdentityRequest, request.get_json(silent=True))
    user_id = _workflow().verify_identity(body.email, body.birth_date)
    return jsonify({"userId": user_id}), 200


# --- RESET PASSWORD ---
@users_bp.route("/reset-password", methods=["POST"])
def reset_password() -> Tuple[Response, int]:
    """
    Second step of a password reset.

    Expects a JSON body with:
    - userId (int): As returned by /verify-identity.
    - newPassword (str)

    Returns:
        200: Confirmation message.
        400: Missing fields.
        404: User not found.
    """
    body = parse_payload(ResetPasswordRequest, request.get_json(silent=True))
    _workflow().reset_password(body.user_id, body.new_password)
    return jsonify({"message": "Password reset successfully"}), 200


# --- DELETE ACCOUNT ---
@users_bp.route("/me/<int:user_id>", methods=["DELETE"])
def delete_account(user_id: int) -> Tuple[Response, int]:
    """
    Permanently delete an account and all of its events.

    Expects a JSON body with:
    - password (str): Current password of the account.

    Returns:
        200: Confirmation with the number of deleted events.
        400: Missing password.
        401: Wrong password.
        404: User not found.
    """
    body = parse_payload(DeleteAccountRequest, request.get_json(silent=True))
    removed = _workflow().delete_own_account(user_id, body.password)
    return jsonify({"message": "Account deleted successfully", "deletedEvents": removed}), 200
