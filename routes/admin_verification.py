"""Admin blueprint for the user verification queue and decisions."""

from __future__ import annotations

from datetime import datetime

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import BadRequest, NotFound

from models import db
from models.notification import AdminNotification
from models.user import User
from models.verification_log import VerificationLog
from schemas.verification_schema import (
    ApproveSchema,
    MarkNotificationsSchema,
    NotificationQuerySchema,
    QueueQuerySchema,
    RejectSchema,
)
from services import verification_queue
from services.verification_status import status_for_user
from utils.auth import require_admin
from utils.persistence import commit_or_raise
from utils.request_validation import load_json, load_query

admin_verification_bp = Blueprint("admin_verification", __name__)


def _get_user_or_404(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found.")
    return user


def _verification_payload(user: User) -> dict:
    data = user.to_dict()
    data["status"] = status_for_user(user).value
    return data


@admin_verification_bp.route("/queue", methods=["GET"])
@jwt_required()
def list_queue():
    """Return the filtered, paginated verification queue."""

    require_admin()
    params = load_query(request, QueueQuerySchema())

    items = verification_queue.build_queue(
        status=params["status"], priority=params["priority"]
    )
    limit, offset = params["limit"], params["offset"]
    page = items[offset : offset + limit]

    return jsonify(
        {
            "success": True,
            "verifications": [item.to_dict() for item in page],
            "total": len(items),
            "limit": limit,
            "offset": offset,
        }
    )


@admin_verification_bp.route("/<int:user_id>", methods=["GET"])
@jwt_required()
def get_verification(user_id: int):
    """Return everything an admin needs to review one user."""

    require_admin()
    user = _get_user_or_404(user_id)

    log_entries = (
        VerificationLog.query.filter_by(user_id=user.id)
        .order_by(VerificationLog.created_at.desc(), VerificationLog.id.desc())
        .all()
    )
    details = user.to_dict()
    details.update(
        {
            "profile": user.profile.to_dict() if user.profile else None,
            "business_profile": user.business_profile.to_dict()
            if user.business_profile
            else None,
            "onboarding_status": user.onboarding_status.to_dict()
            if user.onboarding_status
            else None,
        }
    )
    return jsonify(
        {
            "success": True,
            "user": details,
            "verification_log": [entry.to_dict() for entry in log_entries],
            "queue_status": verification_queue.queue_status(user),
        }
    )


@admin_verification_bp.route("/<int:user_id>/approve", methods=["POST"])
@jwt_required()
def approve(user_id: int):
    """Approve a user, flipping their verification flag."""

    admin = require_admin()
    user = _get_user_or_404(user_id)
    if user.role == "admin":
        raise BadRequest("Administrator accounts are not part of verification.")

    payload = load_json(request, ApproveSchema()) if request.data else {}
    verification_queue.approve_user(user, admin, payload.get("reason"))
    commit_or_raise("approve user")

    return jsonify(
        {
            "success": True,
            "message": "User approved.",
            "verification": _verification_payload(user),
        }
    )


@admin_verification_bp.route("/<int:user_id>/reject", methods=["POST"])
@jwt_required()
def reject(user_id: int):
    """Reject a user with a reason and optional feedback for them."""

    admin = require_admin()
    user = _get_user_or_404(user_id)
    if user.role == "admin":
        raise BadRequest("Administrator accounts are not part of verification.")

    payload = load_json(request, RejectSchema())
    verification_queue.reject_user(user, admin, payload["reason"], payload["feedback"])
    commit_or_raise("reject user")

    return jsonify(
        {
            "success": True,
            "message": "User rejected.",
            "verification": _verification_payload(user),
        }
    )


@admin_verification_bp.route("/notifications", methods=["GET"])
@jwt_required()
def list_notifications():
    """List notifications addressed to the caller or to all admins."""

    admin = require_admin()
    params = load_query(request, NotificationQuerySchema())

    query = AdminNotification.query.filter(AdminNotification.visible_to(admin.id))
    unread_count = query.filter(AdminNotification.is_read.is_(False)).count()
    if params["unread_only"]:
        query = query.filter(AdminNotification.is_read.is_(False))

    total = query.count()
    notifications = (
        query.order_by(AdminNotification.created_at.desc(), AdminNotification.id.desc())
        .offset(params["offset"])
        .limit(params["limit"])
        .all()
    )
    return jsonify(
        {
            "success": True,
            "notifications": [item.to_dict() for item in notifications],
            "total": total,
            "unread_count": unread_count,
        }
    )


@admin_verification_bp.route("/notifications", methods=["POST"])
@jwt_required()
def mark_notifications_read():
    """Mark selected (or all) visible notifications as read."""

    admin = require_admin()
    payload = load_json(request, MarkNotificationsSchema())

    query = AdminNotification.query.filter(
        AdminNotification.visible_to(admin.id),
        AdminNotification.is_read.is_(False),
    )
    if not payload["mark_all"]:
        query = query.filter(AdminNotification.id.in_(payload["notification_ids"]))

    now = datetime.utcnow()
    notifications = query.all()
    for notification in notifications:
        notification.mark_read(now)
    commit_or_raise("update notifications")

    return jsonify(
        {
            "success": True,
            "message": "Notifications marked as read.",
            "updated": len(notifications),
        }
    )
