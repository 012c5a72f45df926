"""Inquiry, inquiry response and inquiry template models."""

from datetime import datetime

from . import db

INQUIRY_TYPES = ("general", "quote_request", "availability", "service_details")
INQUIRY_STATUSES = (
    "sent",
    "viewed",
    "responded",
    "quoted",
    "accepted",
    "declined",
    "expired",
)
INQUIRY_PRIORITIES = ("low", "medium", "high")
RESPONSE_TYPES = ("reply", "quote", "decline", "info_request")


class Inquiry(db.Model):
    """A message from an event manager to a contractor."""

    __tablename__ = "inquiries"

    id = db.Column(db.Integer, primary_key=True)
    event_manager_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    contractor_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    event_id = db.Column(
        db.Integer, db.ForeignKey("events.id", ondelete="SET NULL"), nullable=True
    )
    inquiry_type = db.Column(
        db.Enum(*INQUIRY_TYPES, name="inquiry_type"), nullable=False
    )
    subject = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    event_details = db.Column(db.JSON, nullable=True)
    priority = db.Column(
        db.Enum(*INQUIRY_PRIORITIES, name="inquiry_priority"),
        nullable=False,
        default="medium",
    )
    status = db.Column(
        db.Enum(*INQUIRY_STATUSES, name="inquiry_status"),
        nullable=False,
        default="sent",
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    responses = db.relationship(
        "InquiryResponse",
        back_populates="inquiry",
        cascade="all, delete-orphan",
        order_by="InquiryResponse.created_at",
        lazy="dynamic",
    )

    def is_participant(self, user) -> bool:
        return user.id in (self.event_manager_id, self.contractor_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "event_manager_id": self.event_manager_id,
            "contractor_id": self.contractor_id,
            "event_id": self.event_id,
            "inquiry_type": self.inquiry_type,
            "subject": self.subject,
            "message": self.message,
            "event_details": self.event_details,
            "priority": self.priority,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class InquiryResponse(db.Model):
    """A reply posted to an inquiry by one of its participants."""

    __tablename__ = "inquiry_responses"

    id = db.Column(db.Integer, primary_key=True)
    inquiry_id = db.Column(
        db.Integer, db.ForeignKey("inquiries.id"), nullable=False, index=True
    )
    responder_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    response_type = db.Column(
        db.Enum(*RESPONSE_TYPES, name="inquiry_response_type"),
        nullable=False,
        default="reply",
    )
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    inquiry = db.relationship("Inquiry", back_populates="responses")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "inquiry_id": self.inquiry_id,
            "responder_id": self.responder_id,
            "response_type": self.response_type,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class InquiryTemplate(db.Model):
    """Reusable inquiry text, private to its owner unless published."""

    __tablename__ = "inquiry_templates"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    name = db.Column(db.String(100), nullable=False)
    template_type = db.Column(
        db.Enum(*INQUIRY_TYPES, name="inquiry_template_type"), nullable=False
    )
    subject = db.Column(db.String(200), nullable=True)
    content = db.Column(db.Text, nullable=False)
    is_public = db.Column(db.Boolean, nullable=False, default=False)
    usage_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def is_visible_to(self, user) -> bool:
        return self.is_public or self.user_id == user.id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "template_type": self.template_type,
            "subject": self.subject,
            "content": self.content,
            "is_public": self.is_public,
            "usage_count": self.usage_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
