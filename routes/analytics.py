"""Search analytics blueprint."""

from __future__ import annotations

from datetime import datetime, timedelta
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import func

from extensions import limiter
from models import db
from models.search_query import SearchQuery
from schemas.analytics_schema import (
    PERIOD_DAYS,
    SearchAnalyticsQuerySchema,
    SearchRecordSchema,
)
from utils.auth import get_current_user, require_admin
from utils.persistence import commit_or_raise
from utils.request_validation import load_json, load_query

analytics_bp = Blueprint("analytics", __name__)


def _analytics_limit() -> str:
    return current_app.config["ANALYTICS_RATE_LIMIT"]


def summarize_searches(since: datetime, limit: int) -> dict:
    """Aggregate searches recorded at or after ``since``."""

    in_period = SearchQuery.created_at >= since

    total = (
        db.session.query(func.count(SearchQuery.id)).filter(in_period).scalar() or 0
    )
    unique_users = (
        db.session.query(func.count(func.distinct(SearchQuery.user_id)))
        .filter(in_period)
        .scalar()
        or 0
    )
    zero_results = (
        db.session.query(func.count(SearchQuery.id))
        .filter(in_period, SearchQuery.result_count == 0)
        .scalar()
        or 0
    )

    normalized = func.lower(SearchQuery.query_text)
    top_rows = (
        db.session.query(
            normalized.label("query"),
            func.count(SearchQuery.id).label("count"),
            func.avg(SearchQuery.result_count).label("avg_results"),
        )
        .filter(in_period)
        .group_by(normalized)
        .order_by(func.count(SearchQuery.id).desc(), normalized.asc())
        .limit(limit)
        .all()
    )

    day = func.date(SearchQuery.created_at)
    daily_rows = (
        db.session.query(day.label("date"), func.count(SearchQuery.id).label("count"))
        .filter(in_period)
        .group_by(day)
        .order_by(day.asc())
        .all()
    )

    return {
        "total_searches": total,
        "unique_users": unique_users,
        "zero_result_rate": round(zero_results / total, 4) if total else 0.0,
        "top_queries": [
            {
                "query": row.query,
                "count": row.count,
                "avg_results": round(float(row.avg_results or 0), 2),
            }
            for row in top_rows
        ],
        "daily_counts": [
            {"date": str(row.date), "count": row.count} for row in daily_rows
        ],
    }


@analytics_bp.route("/search/queries", methods=["GET"])
@limiter.limit(_analytics_limit)
@jwt_required()
def search_queries():
    """Return search analytics for the requested period. Admins only."""

    require_admin()
    params = load_query(request, SearchAnalyticsQuerySchema())
    since = datetime.utcnow() - timedelta(days=PERIOD_DAYS[params["period"]])

    analytics = summarize_searches(since, params["limit"])
    analytics["period"] = params["period"]
    return jsonify({"success": True, "analytics": analytics})


@analytics_bp.route("/search/queries", methods=["POST"])
def record_search():
    """Record a search. Anonymous callers are allowed."""

    user = get_current_user(optional=True)
    data = load_json(request, SearchRecordSchema())

    entry = SearchQuery(
        user_id=user.id if user is not None else None,
        query_text=data["query"],
        filters=data["filters"],
        result_count=data["result_count"],
    )
    db.session.add(entry)
    commit_or_raise("record search")

    return jsonify({"success": True, "id": entry.id}), HTTPStatus.CREATED
