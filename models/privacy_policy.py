"""Versioned privacy policy document."""

from datetime import datetime

from . import db


class PrivacyPolicy(db.Model):
    """One published version of the privacy policy."""

    __tablename__ = "privacy_policies"

    id = db.Column(db.Integer, primary_key=True)
    version = db.Column(db.String(32), nullable=False, unique=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    effective_date = db.Column(db.DateTime, nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=False)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    @classmethod
    def deactivate_all(cls, except_id: int | None = None) -> None:
        query = cls.query.filter(cls.is_active.is_(True))
        if except_id is not None:
            query = query.filter(cls.id != except_id)
        for policy in query.all():
            policy.is_active = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "version": self.version,
            "title": self.title,
            "content": self.content,
            "effective_date": self.effective_date.isoformat()
            if self.effective_date
            else None,
            "is_active": self.is_active,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
