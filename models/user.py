"""User model definition."""

from datetime import datetime

from werkzeug.security import check_password_hash, generate_password_hash

from . import db


USER_ROLES = ("event_manager", "contractor", "admin")
BUSINESS_ROLES = ("event_manager", "contractor")


class User(db.Model):
    """Represents a platform user."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(*USER_ROLES, name="user_role"),
        nullable=False,
        default="event_manager",
    )
    is_verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    verified_at = db.Column(db.DateTime, nullable=True)
    last_login = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    profile = db.relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    business_profile = db.relationship(
        "BusinessProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    onboarding_status = db.relationship(
        "ContractorOnboardingStatus",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return check_password_hash(self.password_hash, password)

    def mark_verified(self, now: datetime | None = None) -> None:
        """Mark the user as approved and mirror it onto the business profile."""

        self.is_verified = True
        self.verified_at = now or datetime.utcnow()
        if self.business_profile is not None:
            self.business_profile.is_verified = True
            self.business_profile.verification_date = self.verified_at

    def mark_unverified(self) -> None:
        """Clear the approval flag on the user and the business profile."""

        self.is_verified = False
        self.verified_at = None
        if self.business_profile is not None:
            self.business_profile.is_verified = False
            self.business_profile.verification_date = None

    @property
    def display_name(self) -> str:
        if self.profile is not None:
            return f"{self.profile.first_name} {self.profile.last_name}".strip()
        return self.email

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role,
            "is_verified": self.is_verified,
            "verified_at": self.verified_at.isoformat() if self.verified_at else None,
            "last_login": self.last_login.isoformat() if self.last_login else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
