"""Event manager dashboard aggregation, cached per user."""

from __future__ import annotations

from datetime import datetime

from flask import current_app
from sqlalchemy import func

from extensions import cache
from models import db
from models.event import EVENT_STATUSES, Event
from models.inquiry import INQUIRY_STATUSES, Inquiry


def dashboard_cache_key(user_id: int) -> str:
    return f"events:dashboard:{user_id}"


def invalidate_dashboard(user_id: int) -> None:
    cache.delete(dashboard_cache_key(user_id))


def _counts_by_status(model, owner_column, user_id: int, statuses) -> dict[str, int]:
    counts = dict.fromkeys(statuses, 0)
    rows = (
        db.session.query(model.status, func.count(model.id))
        .filter(owner_column == user_id)
        .group_by(model.status)
        .all()
    )
    for status, count in rows:
        counts[status] = count
    return counts


def compute_dashboard(user_id: int, now: datetime | None = None) -> dict:
    now = now or datetime.utcnow()
    event_counts = _counts_by_status(Event, Event.event_manager_id, user_id, EVENT_STATUSES)

    upcoming = (
        Event.upcoming_filter(Event.query.filter_by(event_manager_id=user_id), now)
        .order_by(Event.event_date.asc())
        .limit(5)
        .all()
    )
    total_budget = (
        db.session.query(func.coalesce(func.sum(Event.budget_total), 0))
        .filter(Event.event_manager_id == user_id, Event.status != "cancelled")
        .scalar()
    )

    return {
        "events": {
            "total": sum(event_counts.values()),
            "by_status": event_counts,
        },
        "upcoming_events": [event.to_summary() for event in upcoming],
        "total_budget": float(total_budget or 0),
        "inquiries": _counts_by_status(
            Inquiry, Inquiry.event_manager_id, user_id, INQUIRY_STATUSES
        ),
        "generated_at": now.isoformat(),
    }


def get_dashboard(user_id: int) -> tuple[dict, bool]:
    """Return ``(dashboard, served_from_cache)``."""

    key = dashboard_cache_key(user_id)
    cached = cache.get(key)
    if cached is not None:
        return cached, True

    dashboard = compute_dashboard(user_id)
    cache.set(key, dashboard, current_app.config["DASHBOARD_CACHE_TTL"])
    return dashboard, False
