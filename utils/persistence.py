"""Session commit helper shared by the blueprints."""

from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import Conflict

from errors import DownstreamError
from models import db


def commit_or_raise(operation: str, conflict: str | None = None) -> None:
    """Commit the session, rolling back and raising an HTTP error on failure.

    Unique constraint violations become ``409 Conflict`` with the ``conflict``
    message. Any other database error becomes a ``DownstreamError`` naming the
    failed operation.
    """

    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        current_app.logger.warning("Integrity error during %s: %s", operation, exc.orig)
        raise Conflict(conflict or f"Could not {operation}: conflicting record.") from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise DownstreamError(operation) from exc
