"""Inquiries blueprint: event manager to contractor messaging and templates."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import or_
from werkzeug.exceptions import Conflict, Forbidden, NotFound

from extensions import limiter
from models import db
from models.event import Event
from models.inquiry import Inquiry, InquiryResponse, InquiryTemplate
from models.user import User
from schemas.inquiry_schema import (
    InquiryCreateSchema,
    InquiryQuerySchema,
    InquiryReplySchema,
    InquiryUpdateSchema,
    TemplateCreateSchema,
    TemplateQuerySchema,
)
from services.dashboard import invalidate_dashboard
from services.inquiry_enrichment import enrich_inquiries, enrich_inquiry
from utils.auth import rate_limit_key, require_role, require_user
from utils.persistence import commit_or_raise
from utils.request_validation import load_json, load_query

inquiries_bp = Blueprint("inquiries", __name__)

FINAL_STATUSES = {"accepted", "declined", "expired"}
CONTRACTOR_STATUSES = {"viewed", "responded", "quoted", "declined"}
MANAGER_STATUSES = {"accepted", "declined", "expired"}
RESPONSE_STATUS = {"reply": "responded", "info_request": "responded", "quote": "quoted", "decline": "declined"}


def _inquiry_rate_limit() -> str:
    return current_app.config["INQUIRY_RATE_LIMIT"]


def _get_inquiry_for(user: User, inquiry_id: int) -> Inquiry:
    inquiry = db.session.get(Inquiry, inquiry_id)
    if inquiry is None:
        raise NotFound("Inquiry not found.")
    if user.role != "admin" and not inquiry.is_participant(user):
        raise Forbidden("You do not have access to this inquiry.")
    return inquiry


def _commit(inquiry: Inquiry, operation: str) -> None:
    commit_or_raise(operation)
    invalidate_dashboard(inquiry.event_manager_id)


@inquiries_bp.route("", methods=["POST"])
@limiter.limit(_inquiry_rate_limit, key_func=rate_limit_key)
@jwt_required()
def create_inquiry():
    """Send an inquiry to a verified contractor."""

    user = require_role("event_manager")
    data = load_json(request, InquiryCreateSchema())

    contractor = db.session.get(User, data["contractor_id"])
    if contractor is None or contractor.role != "contractor" or not contractor.is_verified:
        raise NotFound("Contractor not found or not verified.")

    if data["event_id"] is not None:
        event = db.session.get(Event, data["event_id"])
        if event is None or event.event_manager_id != user.id:
            raise NotFound("Event not found or access denied.")

    if data["template_id"] is not None:
        template = db.session.get(InquiryTemplate, data["template_id"])
        if template is None or not template.is_visible_to(user):
            raise NotFound("Inquiry template not found.")
        template.usage_count = InquiryTemplate.usage_count + 1

    inquiry = Inquiry(
        event_manager_id=user.id,
        contractor_id=contractor.id,
        event_id=data["event_id"],
        inquiry_type=data["inquiry_type"],
        subject=data["subject"],
        message=data["message"],
        event_details=data["event_details"],
        priority=data["priority"],
        status="sent",
    )
    db.session.add(inquiry)
    _commit(inquiry, "create inquiry")

    return (
        jsonify(
            {
                "success": True,
                "message": "Inquiry created successfully.",
                "inquiry": inquiry.to_dict(),
            }
        ),
        HTTPStatus.CREATED,
    )


@inquiries_bp.route("", methods=["GET"])
@jwt_required()
def list_inquiries():
    """List the caller's inquiries with filters and pagination."""

    user = require_user()
    params = load_query(request, InquiryQuerySchema())

    query = Inquiry.query
    if user.role == "contractor":
        query = query.filter(Inquiry.contractor_id == user.id)
    elif user.role == "event_manager":
        query = query.filter(Inquiry.event_manager_id == user.id)

    for field in ("status", "inquiry_type", "priority"):
        if params[field]:
            query = query.filter(getattr(Inquiry, field) == params[field])

    total = query.count()
    page, limit = params["page"], params["limit"]
    inquiries = (
        query.order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return jsonify(
        {
            "success": True,
            "inquiries": enrich_inquiries(inquiries),
            "total": total,
            "page": page,
            "limit": limit,
        }
    )


@inquiries_bp.route("/<int:inquiry_id>", methods=["GET"])
@jwt_required()
def get_inquiry(inquiry_id: int):
    """Return one inquiry with its responses."""

    user = require_user()
    inquiry = _get_inquiry_for(user, inquiry_id)

    if user.id == inquiry.contractor_id and inquiry.status == "sent":
        inquiry.status = "viewed"
        _commit(inquiry, "update inquiry")

    data = enrich_inquiry(inquiry)
    data["responses"] = [response.to_dict() for response in inquiry.responses]
    return jsonify({"success": True, "inquiry": data})


@inquiries_bp.route("/<int:inquiry_id>", methods=["PUT"])
@jwt_required()
def update_inquiry(inquiry_id: int):
    """Update status or priority, subject to the caller's side of the inquiry."""

    user = require_user()
    inquiry = _get_inquiry_for(user, inquiry_id)
    data = load_json(request, InquiryUpdateSchema())

    if user.role != "admin":
        if inquiry.status in FINAL_STATUSES:
            raise Conflict(f"Inquiry is already {inquiry.status}.")
        if user.id == inquiry.contractor_id:
            if "priority" in data:
                raise Forbidden("Contractors can only update status.")
            if "status" in data and data["status"] not in CONTRACTOR_STATUSES:
                raise Forbidden("Contractors cannot set that status.")
        else:
            if "status" in data:
                if data["status"] not in MANAGER_STATUSES:
                    raise Forbidden("Event managers cannot set that status.")
                if data["status"] == "accepted" and inquiry.status != "quoted":
                    raise Conflict("Only quoted inquiries can be accepted.")

    for field, value in data.items():
        setattr(inquiry, field, value)
    _commit(inquiry, "update inquiry")

    return jsonify({"success": True, "inquiry": inquiry.to_dict()})


@inquiries_bp.route("/<int:inquiry_id>", methods=["DELETE"])
@jwt_required()
def delete_inquiry(inquiry_id: int):
    """Delete an inquiry. Only its sender or an admin may do so."""

    user = require_user()
    inquiry = _get_inquiry_for(user, inquiry_id)
    if user.role != "admin" and user.id != inquiry.event_manager_id:
        raise Forbidden("Only the sender can delete an inquiry.")

    manager_id = inquiry.event_manager_id
    InquiryResponse.query.filter_by(inquiry_id=inquiry.id).delete(
        synchronize_session=False
    )
    db.session.delete(inquiry)
    commit_or_raise("delete inquiry")
    invalidate_dashboard(manager_id)
    current_app.logger.info("Inquiry %s deleted by %s", inquiry_id, user.id)

    return jsonify({"success": True, "message": "Inquiry deleted successfully."})


@inquiries_bp.route("/<int:inquiry_id>/respond", methods=["POST"])
@jwt_required()
def respond(inquiry_id: int):
    """Post a response to an inquiry."""

    user = require_user()
    inquiry = _get_inquiry_for(user, inquiry_id)
    if not inquiry.is_participant(user):
        raise Forbidden("Only participants can respond to an inquiry.")
    if inquiry.status in FINAL_STATUSES:
        raise Conflict(f"Inquiry is already {inquiry.status}.")

    data = load_json(request, InquiryReplySchema())
    response = InquiryResponse(
        inquiry_id=inquiry.id,
        responder_id=user.id,
        response_type=data["response_type"],
        message=data["message"],
    )
    db.session.add(response)
    if user.id == inquiry.contractor_id:
        inquiry.status = RESPONSE_STATUS[data["response_type"]]
    _commit(inquiry, "create inquiry response")

    return (
        jsonify(
            {
                "success": True,
                "message": "Response sent.",
                "response": response.to_dict(),
                "inquiry_status": inquiry.status,
            }
        ),
        HTTPStatus.CREATED,
    )


@inquiries_bp.route("/templates", methods=["GET"])
@jwt_required()
def list_templates():
    """Return the caller's templates together with public ones."""

    user = require_user()
    params = load_query(request, TemplateQuerySchema())

    query = InquiryTemplate.query.filter(
        or_(InquiryTemplate.user_id == user.id, InquiryTemplate.is_public.is_(True))
    )
    if params["template_type"]:
        query = query.filter(InquiryTemplate.template_type == params["template_type"])
    templates = query.order_by(
        InquiryTemplate.usage_count.desc(), InquiryTemplate.name.asc()
    ).all()

    return jsonify(
        {
            "success": True,
            "templates": [template.to_dict() for template in templates],
            "total": len(templates),
        }
    )


@inquiries_bp.route("/templates", methods=["POST"])
@jwt_required()
def create_template():
    """Create an inquiry template. Only admins may publish templates."""

    user = require_user()
    data = load_json(request, TemplateCreateSchema())
    if data["is_public"] and user.role != "admin":
        raise Forbidden("Only admins can create public templates.")

    template = InquiryTemplate(user_id=user.id, **data)
    db.session.add(template)
    commit_or_raise("create inquiry template")

    return (
        jsonify({"success": True, "template": template.to_dict()}),
        HTTPStatus.CREATED,
    )
