"""Admin verification queue and approve/reject actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from flask import current_app

from models import db
from models.notification import AdminNotification
from models.user import User
from models.verification_log import VerificationLog
from services.verification_status import (
    VerificationStatus,
    derive_verification_status,
    load_signals,
)

logger = logging.getLogger(__name__)

PRIORITY_LABELS = {1: "low", 2: "medium", 3: "high"}
PRIORITY_LEVELS = {label: level for level, label in PRIORITY_LABELS.items()}


@dataclass
class QueueItem:
    user: User
    status: VerificationStatus
    priority: int
    submitted_at: datetime

    def to_dict(self) -> dict:
        user = self.user
        data = user.to_dict()
        data.update(
            {
                "status": self.status.value,
                "priority": self.priority,
                "priority_label": PRIORITY_LABELS[self.priority],
                "verification_type": user.role,
                "submitted_at": self.submitted_at.isoformat(),
                "profile": user.profile.to_dict() if user.profile else None,
                "business_profile": user.business_profile.to_dict()
                if user.business_profile
                else None,
            }
        )
        return data


def submitted_at(user: User) -> datetime:
    """When the user entered the queue: onboarding submission, else sign-up."""

    onboarding = user.onboarding_status
    if onboarding is not None and onboarding.submission_date is not None:
        return onboarding.submission_date
    return user.created_at


def compute_priority(waiting_since: datetime, now: datetime | None = None) -> int:
    now = now or datetime.utcnow()
    waited_days = (now - waiting_since).total_seconds() / 86400
    if waited_days >= current_app.config["VERIFICATION_HIGH_PRIORITY_DAYS"]:
        return 3
    if waited_days >= current_app.config["VERIFICATION_MEDIUM_PRIORITY_DAYS"]:
        return 2
    return 1


def build_queue(
    status: str | None = "pending",
    priority: str | None = None,
    now: datetime | None = None,
) -> list[QueueItem]:
    """Return non-admin users with derived status, oldest submission first."""

    now = now or datetime.utcnow()
    users = User.query.filter(User.role != "admin").all()
    signals = load_signals(users)

    items = []
    for user in users:
        derived = derive_verification_status(signals[user.id])
        if status and status != "all" and derived.value != status:
            continue
        waiting_since = submitted_at(user)
        level = compute_priority(waiting_since, now)
        if priority and PRIORITY_LEVELS[priority] != level:
            continue
        items.append(QueueItem(user, derived, level, waiting_since))

    items.sort(key=lambda item: (item.submitted_at, item.user.id))
    return items


def queue_status(user: User, now: datetime | None = None) -> dict:
    derived = derive_verification_status(load_signals([user])[user.id])
    latest = (
        VerificationLog.query.filter_by(user_id=user.id)
        .order_by(VerificationLog.created_at.desc(), VerificationLog.id.desc())
        .first()
    )
    waiting_since = submitted_at(user)
    return {
        "status": derived.value,
        "priority": compute_priority(waiting_since, now),
        "verification_type": user.role,
        "submitted_at": waiting_since.isoformat(),
        "reviewed_at": latest.created_at.isoformat() if latest else None,
    }


def _notify_admins(kind: str, title: str, message: str, data: dict) -> None:
    db.session.add(
        AdminNotification(type=kind, title=title, message=message, data=data)
    )


def approve_user(user: User, admin: User, reason: str | None = None) -> VerificationLog:
    """Approve ``user`` and record the decision."""

    now = datetime.utcnow()
    user.mark_verified(now)
    onboarding = user.onboarding_status
    if onboarding is not None:
        onboarding.approval_status = "approved"
        onboarding.approval_date = now

    entry = VerificationLog(
        user_id=user.id,
        admin_id=admin.id,
        action="approve",
        status="approved",
        reason=reason,
        created_at=now,
    )
    db.session.add(entry)
    _notify_admins(
        "verification_approved",
        "User approved",
        f"{user.email} was approved by {admin.email}.",
        {"user_id": user.id, "admin_id": admin.id},
    )
    logger.info("Admin %s approved user %s", admin.id, user.id)
    return entry


def reject_user(
    user: User, admin: User, reason: str, feedback: str | None = None
) -> VerificationLog:
    """Reject ``user`` and record the decision with the reviewer's feedback."""

    now = datetime.utcnow()
    user.mark_unverified()
    onboarding = user.onboarding_status
    if onboarding is not None:
        onboarding.approval_status = "rejected"
        onboarding.approval_date = now
        onboarding.admin_notes = feedback

    entry = VerificationLog(
        user_id=user.id,
        admin_id=admin.id,
        action="reject",
        status="rejected",
        reason=reason,
        feedback=feedback,
        created_at=now,
    )
    db.session.add(entry)
    _notify_admins(
        "verification_rejected",
        "User rejected",
        f"{user.email} was rejected by {admin.email}: {reason}",
        {"user_id": user.id, "admin_id": admin.id},
    )
    logger.info("Admin %s rejected user %s", admin.id, user.id)
    return entry


def notify_onboarding_submitted(user: User) -> None:
    _notify_admins(
        "onboarding_submitted",
        "Onboarding submitted",
        f"{user.email} submitted contractor onboarding for review.",
        {"user_id": user.id},
    )
