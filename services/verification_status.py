"""Verification status derivation.

A user's verification status is never stored. It is re-derived on every read
from four signals, each living in a different table:

* ``users.is_verified`` -- the approval flag written by the admin actions,
* ``verification_logs`` -- whether any rejection has ever been recorded,
* the contractor onboarding record,
* the user's role.

Precedence, highest first: approved, rejected, onboarding, pending.
``business_profiles.is_verified`` is only a mirror of the user flag and is
not read here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from models import db
from models.onboarding import ContractorOnboardingStatus
from models.user import User
from models.verification_log import VerificationLog


class VerificationStatus(str, Enum):
    """Derived verification state of a user."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ONBOARDING = "onboarding"


@dataclass(frozen=True)
class VerificationSignals:
    """Normalized inputs to :func:`derive_verification_status`."""

    role: str
    is_verified: bool
    has_rejection: bool
    onboarding_submitted: bool


def derive_verification_status(signals: VerificationSignals) -> VerificationStatus:
    """Return the single current status implied by ``signals``."""

    if signals.is_verified:
        return VerificationStatus.APPROVED
    if signals.has_rejection:
        return VerificationStatus.REJECTED
    if signals.role == "contractor" and not signals.onboarding_submitted:
        return VerificationStatus.ONBOARDING
    return VerificationStatus.PENDING


def load_signals(users: Iterable[User]) -> dict[int, VerificationSignals]:
    """Collect signals for many users with one query per source table."""

    users = list(users)
    user_ids = [user.id for user in users]
    if not user_ids:
        return {}

    rejected_ids = {
        row.user_id
        for row in db.session.query(VerificationLog.user_id)
        .filter(
            VerificationLog.user_id.in_(user_ids),
            VerificationLog.rejection_filter(),
        )
        .distinct()
    }
    submitted_contractors = {
        row.user_id
        for row in db.session.query(ContractorOnboardingStatus.user_id).filter(
            ContractorOnboardingStatus.user_id.in_(user_ids),
            ContractorOnboardingStatus.is_submitted.is_(True),
        )
    }

    return {
        user.id: VerificationSignals(
            role=user.role,
            is_verified=bool(user.is_verified),
            has_rejection=user.id in rejected_ids,
            onboarding_submitted=(
                user.role != "contractor" or user.id in submitted_contractors
            ),
        )
        for user in users
    }


def status_for_user(user: User) -> VerificationStatus:
    """Derive the status of one user from the current database rows."""

    return derive_verification_status(load_signals([user])[user.id])
