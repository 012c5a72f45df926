"""Admin notification model."""

from datetime import datetime

from sqlalchemy import or_

from . import db


NOTIFICATION_TYPES = (
    "onboarding_submitted",
    "verification_approved",
    "verification_rejected",
)


class AdminNotification(db.Model):
    """A notification for one administrator, or all when recipient is null."""

    __tablename__ = "admin_notifications"

    id = db.Column(db.Integer, primary_key=True)
    recipient_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=True, index=True
    )
    type = db.Column(
        db.Enum(*NOTIFICATION_TYPES, name="admin_notification_type"), nullable=False
    )
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    data = db.Column(db.JSON, nullable=False, default=dict)
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    read_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    @staticmethod
    def visible_to(admin_id: int):
        return or_(
            AdminNotification.recipient_id.is_(None),
            AdminNotification.recipient_id == admin_id,
        )

    def mark_read(self, now: datetime | None = None) -> None:
        if not self.is_read:
            self.is_read = True
            self.read_at = now or datetime.utcnow()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "data": dict(self.data or {}),
            "is_read": self.is_read,
            "read_at": self.read_at.isoformat() if self.read_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
