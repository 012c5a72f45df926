"""Append-only audit trail of admin verification decisions."""

from datetime import datetime

from sqlalchemy import or_

from . import db


VERIFICATION_ACTIONS = ("approve", "reject")
VERIFICATION_LOG_STATUSES = ("approved", "rejected")


class VerificationLog(db.Model):
    """A single approve or reject decision made by an administrator."""

    __tablename__ = "verification_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    admin_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    action = db.Column(
        db.Enum(*VERIFICATION_ACTIONS, name="verification_action"), nullable=False
    )
    status = db.Column(
        db.Enum(*VERIFICATION_LOG_STATUSES, name="verification_log_status"),
        nullable=False,
    )
    reason = db.Column(db.Text, nullable=True)
    feedback = db.Column(db.Text, nullable=True)
    created_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        server_default=db.func.now(),
    )

    user = db.relationship("User", foreign_keys=[user_id])
    admin = db.relationship("User", foreign_keys=[admin_id])

    @staticmethod
    def rejection_filter():
        """SQL criterion matching entries that record a rejection."""

        return or_(
            VerificationLog.action == "reject",
            VerificationLog.status == "rejected",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "action": self.action,
            "status": self.status,
            "reason": self.reason,
            "feedback": self.feedback,
            "admin_user": {"id": self.admin.id, "email": self.admin.email}
            if self.admin is not None
            else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
