"""Attach sender, contractor and event summaries to inquiries.

Each lookup is independent. When one fails the inquiry is still returned, with
a placeholder in place of the missing summary.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.event import Event
from models.inquiry import Inquiry
from models.user import User

logger = logging.getLogger(__name__)


def placeholder_user(user_id: int | None) -> dict:
    return {"id": user_id, "email": None, "name": "Unknown user"}


def _user_summary(user_id: int) -> dict:
    user = db.session.get(User, user_id)
    if user is None:
        return placeholder_user(user_id)
    summary = {"id": user.id, "email": user.email, "name": user.display_name}
    if user.profile is not None:
        summary["avatar_url"] = user.profile.avatar_url
    if user.business_profile is not None:
        summary["company_name"] = user.business_profile.company_name
    return summary


def _safe_user_summary(user_id: int, label: str, inquiry_id: int) -> dict:
    try:
        return _user_summary(user_id)
    except SQLAlchemyError:
        db.session.rollback()
        logger.warning(
            "Could not load %s %s for inquiry %s", label, user_id, inquiry_id, exc_info=True
        )
        return placeholder_user(user_id)


def _safe_event_summary(event_id: int | None, inquiry_id: int) -> dict | None:
    if event_id is None:
        return None
    try:
        event = db.session.get(Event, event_id)
    except SQLAlchemyError:
        db.session.rollback()
        logger.warning(
            "Could not load event %s for inquiry %s", event_id, inquiry_id, exc_info=True
        )
        return None
    return event.to_summary() if event is not None else None


def enrich_inquiry(inquiry: Inquiry) -> dict:
    data = inquiry.to_dict()
    data["sender"] = _safe_user_summary(inquiry.event_manager_id, "sender", inquiry.id)
    data["contractor"] = _safe_user_summary(
        inquiry.contractor_id, "contractor", inquiry.id
    )
    data["event"] = _safe_event_summary(inquiry.event_id, inquiry.id)
    return data


def enrich_inquiries(inquiries: list[Inquiry]) -> list[dict]:
    return [enrich_inquiry(inquiry) for inquiry in inquiries]
