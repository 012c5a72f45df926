"""Search query log used for admin analytics."""

from datetime import datetime

from . import db


class SearchQuery(db.Model):
    """A single contractor search as typed by a visitor."""

    __tablename__ = "search_queries"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    query_text = db.Column("query", db.String(255), nullable=False)
    filters = db.Column(db.JSON, nullable=False, default=dict)
    result_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
