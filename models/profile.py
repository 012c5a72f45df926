"""Personal and business profile models."""

from datetime import datetime

from . import db


class Profile(db.Model):
    """Personal profile details for a user."""

    __tablename__ = "profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, unique=True
    )
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(32), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    bio = db.Column(db.Text, nullable=True)
    avatar_url = db.Column(db.String(512), nullable=True)
    location = db.Column(db.String(255), nullable=True)
    timezone = db.Column(db.String(64), nullable=False, default="Pacific/Auckland")
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    user = db.relationship("User", back_populates="profile")

    def to_dict(self) -> dict:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "address": self.address,
            "bio": self.bio,
            "avatar_url": self.avatar_url,
            "location": self.location,
            "timezone": self.timezone,
        }


class BusinessProfile(db.Model):
    """Company-level profile for contractors and event managers."""

    __tablename__ = "business_profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, unique=True
    )
    company_name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    website = db.Column(db.String(255), nullable=True)
    location = db.Column(db.String(255), nullable=True)
    business_address = db.Column(db.String(255), nullable=True)
    nzbn = db.Column(db.String(13), nullable=True)
    service_areas = db.Column(db.JSON, nullable=False, default=list)
    # Mirror of users.is_verified; never consulted when deriving status.
    is_verified = db.Column(db.Boolean, nullable=False, default=False)
    verification_date = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    user = db.relationship("User", back_populates="business_profile")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "company_name": self.company_name,
            "description": self.description,
            "website": self.website,
            "location": self.location,
            "business_address": self.business_address,
            "nzbn": self.nzbn,
            "service_areas": list(self.service_areas or []),
            "is_verified": self.is_verified,
            "verification_date": self.verification_date.isoformat()
            if self.verification_date
            else None,
        }
