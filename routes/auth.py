"""Authentication blueprint providing register, login and profile endpoints."""

from __future__ import annotations

from datetime import datetime
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, jwt_required
from sqlalchemy import func
from werkzeug.exceptions import Conflict, Unauthorized

from models import db
from models.user import User
from schemas.auth_schema import LoginSchema, RegisterSchema
from services.verification_status import status_for_user
from utils.auth import require_user
from utils.persistence import commit_or_raise
from utils.request_validation import load_json

auth_bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()


def _user_payload(user: User) -> dict:
    return {"id": user.id, "email": user.email, "role": user.role}


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new event manager or contractor."""
    payload = load_json(request, register_schema)

    # Case-insensitive unique check
    existing = User.query.filter(func.lower(User.email) == payload["email"]).first()
    if existing is not None:
        raise Conflict("A user with that email already exists.")

    user = User(email=payload["email"], role=payload["role"])
    user.set_password(payload["password"])

    db.session.add(user)
    commit_or_raise("register user", conflict="A user with that email already exists.")
    current_app.logger.info("Registered %s user %s", user.role, user.id)

    return (
        jsonify(
            {
                "success": True,
                "message": "User registered successfully.",
                "user": _user_payload(user),
            }
        ),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a JWT access token."""
    payload = load_json(request, login_schema)

    # Case-insensitive lookup
    user = User.query.filter(func.lower(User.email) == payload["email"]).first()
    if user is None or not user.check_password(payload["password"]):
        raise Unauthorized("Invalid email or password.")

    user.last_login = datetime.utcnow()
    commit_or_raise("record login")

    token = create_access_token(identity=str(user.id))
    return (
        jsonify({"success": True, "access_token": token, "user": _user_payload(user)}),
        HTTPStatus.OK,
    )


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    """Return the current user with their derived verification status."""
    user = require_user()
    data = user.to_dict()
    data["verification_status"] = status_for_user(user).value
    data["profile"] = user.profile.to_dict() if user.profile else None
    return jsonify({"success": True, "user": data})
