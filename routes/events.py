"""Events blueprint with event CRUD and the manager dashboard."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import BadRequest, Forbidden, NotFound

from models import db
from models.event import Event
from models.inquiry import Inquiry
from models.user import User
from schemas.event_schema import EventCreateSchema, EventQuerySchema, EventUpdateSchema
from services.dashboard import get_dashboard, invalidate_dashboard
from utils.auth import require_role
from utils.persistence import commit_or_raise
from utils.request_validation import load_json, load_query

events_bp = Blueprint("events", __name__)

LOCKED_STATUSES = ("in_progress", "completed")


def _get_event_for(user: User, event_id: int) -> Event:
    event = db.session.get(Event, event_id)
    if event is None:
        raise NotFound("Event not found.")
    if user.role != "admin" and event.event_manager_id != user.id:
        raise Forbidden("You do not have access to this event.")
    return event


@events_bp.route("", methods=["POST"])
@jwt_required()
def create_event():
    """Create an event. Event managers only."""

    user = require_role("event_manager")
    data = load_json(request, EventCreateSchema())

    event = Event(
        event_manager_id=user.id,
        title=data["title"],
        description=data["description"],
        event_type=data["event_type"],
        event_date=data["event_date"],
        duration_hours=data["duration_hours"],
        attendee_count=data["attendee_count"],
        location=data["location"],
        budget_total=data["budget_total"],
        special_requirements=data["special_requirements"],
        status="draft" if data["is_draft"] else "planning",
    )
    db.session.add(event)
    commit_or_raise("create event")

    invalidate_dashboard(user.id)
    current_app.logger.info("Event %s created by %s", event.id, user.id)
    return (
        jsonify(
            {
                "success": True,
                "message": "Event created successfully.",
                "event": event.to_dict(),
            }
        ),
        HTTPStatus.CREATED,
    )


@events_bp.route("", methods=["GET"])
@jwt_required()
def list_events():
    """Return events visible to the caller with optional filters."""

    user = require_role("event_manager", "admin")
    params = load_query(request, EventQuerySchema())

    query = Event.query
    if user.role == "event_manager":
        query = query.filter(Event.event_manager_id == user.id)
    if params["status"]:
        query = query.filter(Event.status == params["status"])
    if params["event_type"]:
        query = query.filter(Event.event_type == params["event_type"])

    total = query.count()
    page, limit = params["page"], params["limit"]
    events = (
        query.order_by(Event.created_at.desc(), Event.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return jsonify(
        {
            "success": True,
            "events": [event.to_dict() for event in events],
            "total": total,
            "page": page,
            "limit": limit,
        }
    )


@events_bp.route("/dashboard", methods=["GET"])
@jwt_required()
def dashboard():
    """Return the caller's cached dashboard aggregation."""

    user = require_role("event_manager")
    data, cached = get_dashboard(user.id)
    return jsonify({"success": True, "dashboard": data, "cached": cached})


@events_bp.route("/<int:event_id>", methods=["GET"])
@jwt_required()
def get_event(event_id: int):
    """Return one event to its manager or an admin."""

    user = require_role("event_manager", "admin")
    event = _get_event_for(user, event_id)
    return jsonify({"success": True, "event": event.to_dict()})


@events_bp.route("/<int:event_id>", methods=["PUT"])
@jwt_required()
def update_event(event_id: int):
    """Apply a partial update to an event."""

    user = require_role("event_manager", "admin")
    event = _get_event_for(user, event_id)
    data = load_json(request, EventUpdateSchema(), partial=True)

    for field, value in data.items():
        setattr(event, field, value)
    commit_or_raise("update event")

    invalidate_dashboard(event.event_manager_id)
    current_app.logger.info("Event %s updated by %s", event.id, user.id)
    return jsonify(
        {
            "success": True,
            "message": "Event updated successfully.",
            "event": event.to_dict(),
        }
    )


@events_bp.route("/<int:event_id>", methods=["DELETE"])
@jwt_required()
def delete_event(event_id: int):
    """Delete an event unless it is already running or finished."""

    user = require_role("event_manager", "admin")
    event = _get_event_for(user, event_id)
    if event.status in LOCKED_STATUSES:
        raise BadRequest("Cannot delete event in current status.")

    manager_id = event.event_manager_id
    Inquiry.query.filter_by(event_id=event.id).update(
        {"event_id": None}, synchronize_session=False
    )
    db.session.delete(event)
    commit_or_raise("delete event")

    invalidate_dashboard(manager_id)
    current_app.logger.info("Event %s deleted by %s", event_id, user.id)
    return jsonify({"success": True, "message": "Event deleted successfully."})
