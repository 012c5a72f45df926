"""Contractor onboarding progress model."""

from datetime import datetime

from . import db


ONBOARDING_STEPS = (
    "step1_completed",
    "step2_completed",
    "step3_completed",
    "step4_completed",
)
APPROVAL_STATUSES = ("pending", "approved", "rejected")


class ContractorOnboardingStatus(db.Model):
    """Tracks a contractor's progress through the onboarding flow."""

    __tablename__ = "contractor_onboarding_status"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, unique=True
    )
    step1_completed = db.Column(db.Boolean, nullable=False, default=False)
    step2_completed = db.Column(db.Boolean, nullable=False, default=False)
    step3_completed = db.Column(db.Boolean, nullable=False, default=False)
    step4_completed = db.Column(db.Boolean, nullable=False, default=False)
    is_submitted = db.Column(db.Boolean, nullable=False, default=False)
    submission_date = db.Column(db.DateTime, nullable=True)
    approval_status = db.Column(
        db.Enum(*APPROVAL_STATUSES, name="onboarding_approval_status"),
        nullable=False,
        default="pending",
    )
    approval_date = db.Column(db.DateTime, nullable=True)
    admin_notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    user = db.relationship("User", back_populates="onboarding_status")

    @property
    def all_steps_completed(self) -> bool:
        return all(getattr(self, step) for step in ONBOARDING_STEPS)

    def to_dict(self) -> dict:
        data = {step: bool(getattr(self, step)) for step in ONBOARDING_STEPS}
        data.update(
            {
                "is_submitted": self.is_submitted,
                "submission_date": self.submission_date.isoformat()
                if self.submission_date
                else None,
                "approval_status": self.approval_status,
                "approval_date": self.approval_date.isoformat()
                if self.approval_date
                else None,
                "admin_notes": self.admin_notes,
            }
        )
        return data
