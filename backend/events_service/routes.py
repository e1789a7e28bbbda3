"""
Events service routes: create, list and delete a user's events.
"""

import logging
from typing import Tuple

from flask import Blueprint, Response, current_app, jsonify, request

from backend.events_service.schemas import CreateEventRequest
from backend.validation import parse_payload
from backend.workflow import AccountWorkflow

events_bp = Blueprint("events", __name__)


def _workflow() -> AccountWorkflow:
    return current_app.extensions["accounts"]


@events_bp.before_request
def before_request() -> None:
    logging.info(f"[Events] Incoming {request.method} {request.path}")


@events_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Events] Response {response.status}")
    return response


@events_bp.route("", methods=["POST"])
def create_event() -> Tuple[Response, int]:
    """
    Create an event for a user.

    Expects a JSON body with:
    - userId (int): Owner of the event.
    - eventName (str)
    - venue (str)
    - dateTime (str): ISO-8601 timestamp.

    Returns:
        201: The created event.
        400: Missing or malformed fields.
        500: Database error (including an unknown owner).
    """
    body = parse_payload(CreateEventRequest, request.get_json(silent=True))
    event = _workflow().create_event(body.user_id, body.event_name, body.venue, body.date_time)
    return jsonify(event.to_dict()), 201


@events_bp.route("/<int:user_id>", methods=["GET"])
def list_events(user_id: int) -> Tuple[Response, int]:
    """
    Return a user's events, earliest first.

    Returns:
        200: List of event objects (empty if the user has none).
        500: Database error.
    """
    events = _workflow().list_events(user_id)
    return jsonify([event.to_dict() for event in events]), 200


@events_bp.route("/<int:event_id>", methods=["DELETE"])
def delete_event(event_id: int) -> Tuple[Response, int]:
    """
    Delete a single event by id. Ownership is not checked.

    Returns:
        200: Confirmation message.
        404: Event not found.
    """
    _workflow().delete_event(event_id)
    return jsonify({"message": "Event deleted successfully"}), 200
