"""Privacy policy blueprint with per-method rate limits."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import Conflict, NotFound

from extensions import limiter
from models import db
from models.privacy_policy import PrivacyPolicy
from schemas.privacy_schema import (
    PolicyCreateSchema,
    PolicyQuerySchema,
    PolicyUpdateSchema,
)
from utils.auth import require_admin
from utils.persistence import commit_or_raise
from utils.request_validation import load_json, load_query

privacy_bp = Blueprint("privacy", __name__)


def _read_limit() -> str:
    return current_app.config["PRIVACY_READ_RATE_LIMIT"]


def _write_limit() -> str:
    return current_app.config["PRIVACY_WRITE_RATE_LIMIT"]


@privacy_bp.route("/policy", methods=["GET"])
@limiter.limit(_read_limit)
def get_policy():
    """Return the active policy, or every version for admins with ``all``."""

    params = load_query(request, PolicyQuerySchema())
    if params["all"]:
        require_admin()
        policies = PrivacyPolicy.query.order_by(
            PrivacyPolicy.effective_date.desc(), PrivacyPolicy.id.desc()
        ).all()
        return jsonify(
            {"success": True, "policies": [policy.to_dict() for policy in policies]}
        )

    policy = (
        PrivacyPolicy.query.filter(PrivacyPolicy.is_active.is_(True))
        .order_by(PrivacyPolicy.effective_date.desc())
        .first()
    )
    if policy is None:
        raise NotFound("No active privacy policy.")
    return jsonify({"success": True, "policy": policy.to_dict()})


@privacy_bp.route("/policy", methods=["POST"])
@limiter.limit(_write_limit)
@jwt_required()
def create_policy():
    """Publish a new policy version."""

    admin = require_admin()
    data = load_json(request, PolicyCreateSchema())

    if PrivacyPolicy.query.filter_by(version=data["version"]).first() is not None:
        raise Conflict(f"Policy version {data['version']} already exists.")

    if data["is_active"]:
        PrivacyPolicy.deactivate_all()
    policy = PrivacyPolicy(created_by=admin.id, **data)
    db.session.add(policy)
    commit_or_raise(
        "create privacy policy",
        conflict=f"Policy version {data['version']} already exists.",
    )
    current_app.logger.info("Privacy policy %s created by %s", policy.version, admin.id)

    return (
        jsonify({"success": True, "policy": policy.to_dict()}),
        HTTPStatus.CREATED,
    )


@privacy_bp.route("/policy", methods=["PUT"])
@limiter.limit(_write_limit)
@jwt_required()
def update_policy():
    """Update an existing policy version."""

    admin = require_admin()
    data = load_json(request, PolicyUpdateSchema())

    policy = db.session.get(PrivacyPolicy, data.pop("id"))
    if policy is None:
        raise NotFound("Privacy policy not found.")

    for field, value in data.items():
        setattr(policy, field, value)
    if data.get("is_active"):
        PrivacyPolicy.deactivate_all(except_id=policy.id)
    commit_or_raise("update privacy policy")
    current_app.logger.info("Privacy policy %s updated by %s", policy.version, admin.id)

    return jsonify({"success": True, "policy": policy.to_dict()})
