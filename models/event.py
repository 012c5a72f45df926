"""Event model."""

from datetime import datetime

from . import db

EVENT_TYPES = (
    "wedding",
    "corporate",
    "birthday",
    "conference",
    "festival",
    "concert",
    "fundraiser",
    "private_party",
    "other",
)
EVENT_STATUSES = (
    "draft",
    "planning",
    "confirmed",
    "in_progress",
    "completed",
    "cancelled",
)


class Event(db.Model):
    """An event organised by an event manager."""

    __tablename__ = "events"

    id = db.Column(db.Integer, primary_key=True)
    event_manager_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    event_type = db.Column(db.Enum(*EVENT_TYPES, name="event_type"), nullable=False)
    event_date = db.Column(db.DateTime, nullable=False)
    duration_hours = db.Column(db.Float, nullable=True)
    attendee_count = db.Column(db.Integer, nullable=True)
    location = db.Column(db.JSON, nullable=True)
    budget_total = db.Column(db.Numeric(12, 2), nullable=True)
    special_requirements = db.Column(db.Text, nullable=True)
    status = db.Column(
        db.Enum(*EVENT_STATUSES, name="event_status"),
        nullable=False,
        default="planning",
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    event_manager = db.relationship(
        "User", backref=db.backref("events", lazy="dynamic")
    )

    @staticmethod
    def upcoming_filter(query, now=None):
        """Restrict a query to future events that are still going ahead."""

        now = now or datetime.utcnow()
        return query.filter(
            Event.event_date >= now,
            Event.status.notin_(("cancelled", "completed")),
        )

    def to_dict(self) -> dict:
        """Serialize the event to a dictionary."""

        return {
            "id": self.id,
            "event_manager_id": self.event_manager_id,
            "title": self.title,
            "description": self.description,
            "event_type": self.event_type,
            "event_date": self.event_date.isoformat() if self.event_date else None,
            "duration_hours": self.duration_hours,
            "attendee_count": self.attendee_count,
            "location": self.location,
            "budget_total": float(self.budget_total)
            if self.budget_total is not None
            else None,
            "special_requirements": self.special_requirements,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def to_summary(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "event_type": self.event_type,
            "event_date": self.event_date.isoformat() if self.event_date else None,
        }
