"""Onboarding blueprint: profile completion and contractor submission."""

from __future__ import annotations

from datetime import datetime
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import BadRequest, Conflict

from models import db
from models.onboarding import ONBOARDING_STEPS, ContractorOnboardingStatus
from models.profile import BusinessProfile, Profile
from models.user import BUSINESS_ROLES, User
from schemas.onboarding_schema import (
    BusinessProfileSchema,
    OnboardingStepsSchema,
    ProfileSchema,
)
from services.verification_queue import notify_onboarding_submitted
from services.verification_status import status_for_user
from utils.auth import require_role, require_user
from utils.persistence import commit_or_raise
from utils.request_validation import load_json

onboarding_bp = Blueprint("onboarding", __name__)


def _get_or_create_onboarding(user: User) -> ContractorOnboardingStatus:
    onboarding = user.onboarding_status
    if onboarding is None:
        onboarding = ContractorOnboardingStatus(user_id=user.id)
        db.session.add(onboarding)
        user.onboarding_status = onboarding
    return onboarding


def _status_response(user: User) -> dict:
    onboarding = user.onboarding_status
    return {
        "success": True,
        "onboarding": onboarding.to_dict() if onboarding else None,
        "verification_status": status_for_user(user).value,
    }


@onboarding_bp.route("/status", methods=["GET"])
@jwt_required()
def get_status():
    """Return onboarding progress and the caller's verification status."""

    user = require_user()
    if user.role == "contractor":
        _get_or_create_onboarding(user)
        commit_or_raise("create onboarding status")
    return jsonify(_status_response(user))


@onboarding_bp.route("/status", methods=["PUT"])
@jwt_required()
def update_steps():
    """Record completed onboarding steps for a contractor."""

    user = require_role("contractor")
    payload = load_json(request, OnboardingStepsSchema())

    onboarding = _get_or_create_onboarding(user)
    if onboarding.is_submitted:
        raise Conflict("Onboarding has already been submitted.")
    for step in ONBOARDING_STEPS:
        if step in payload:
            setattr(onboarding, step, payload[step])
    commit_or_raise("update onboarding status")

    return jsonify(_status_response(user))


@onboarding_bp.route("/submit", methods=["POST"])
@jwt_required()
def submit():
    """Submit a completed onboarding for admin review."""

    user = require_role("contractor")
    onboarding = _get_or_create_onboarding(user)
    if onboarding.is_submitted:
        raise Conflict("Onboarding has already been submitted.")
    if not onboarding.all_steps_completed:
        missing = [step for step in ONBOARDING_STEPS if not getattr(onboarding, step)]
        raise BadRequest(
            "All onboarding steps must be completed before submitting: {}.".format(
                ", ".join(missing)
            )
        )

    onboarding.is_submitted = True
    onboarding.submission_date = datetime.utcnow()
    onboarding.approval_status = "pending"
    notify_onboarding_submitted(user)
    commit_or_raise("submit onboarding")
    current_app.logger.info("Contractor %s submitted onboarding", user.id)

    return jsonify(_status_response(user))


@onboarding_bp.route("/profile", methods=["PUT"])
@jwt_required()
def upsert_profile():
    """Create or update the caller's personal profile."""

    user = require_user()
    profile = user.profile
    payload = load_json(request, ProfileSchema(), partial=profile is not None)

    created = profile is None
    if created:
        profile = Profile(user_id=user.id)
        db.session.add(profile)
        user.profile = profile
    for field, value in payload.items():
        setattr(profile, field, value)
    commit_or_raise("save profile")

    status = HTTPStatus.CREATED if created else HTTPStatus.OK
    return jsonify({"success": True, "profile": profile.to_dict()}), status


@onboarding_bp.route("/business-profile", methods=["PUT"])
@jwt_required()
def upsert_business_profile():
    """Create or update the caller's business profile."""

    user = require_role(*BUSINESS_ROLES)
    business = user.business_profile
    payload = load_json(request, BusinessProfileSchema(), partial=business is not None)

    created = business is None
    if created:
        business = BusinessProfile(user_id=user.id, is_verified=bool(user.is_verified))
        db.session.add(business)
        user.business_profile = business
    for field, value in payload.items():
        setattr(business, field, value)
    commit_or_raise("save business profile")

    status = HTTPStatus.CREATED if created else HTTPStatus.OK
    return jsonify({"success": True, "business_profile": business.to_dict()}), status
