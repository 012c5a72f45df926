"""Helpers for resolving the authenticated user inside a request."""

from __future__ import annotations

from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from flask_limiter.util import get_remote_address
from jwt import PyJWTError
from werkzeug.exceptions import Forbidden, Unauthorized

from models import db
from models.user import User


def get_current_user(optional: bool = False) -> User | None:
    """Return the user named by the request's JWT, if any."""

    verify_jwt_in_request(optional=optional)
    identity = get_jwt_identity()
    if identity is None:
        return None
    try:
        user_id = int(identity)
    except (TypeError, ValueError):
        return None
    return db.session.get(User, user_id)


def require_user() -> User:
    user = get_current_user()
    if user is None:
        raise Unauthorized("User not found for this token.")
    return user


def require_role(*roles: str) -> User:
    """Return the current user or raise 403 when their role is not allowed."""

    user = require_user()
    if user.role not in roles:
        allowed = " or ".join(role.replace("_", " ") for role in roles)
        raise Forbidden(f"Only {allowed} users can perform this action.")
    return user


def require_admin() -> User:
    user = require_user()
    if user.role != "admin":
        raise Forbidden("Admin privileges required.")
    return user


def rate_limit_key() -> str:
    """Rate-limit per authenticated user, falling back to the client address."""

    try:
        verify_jwt_in_request(optional=True)
        identity = get_jwt_identity()
    except (JWTExtendedException, PyJWTError):
        identity = None
    if identity is not None:
        return f"user:{identity}"
    return get_remote_address()
