"""Database initialization and model exports."""

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()

# Import models to register them with SQLAlchemy metadata.
from .user import User  # noqa: E402,F401
from .profile import BusinessProfile, Profile  # noqa: E402,F401
from .onboarding import ContractorOnboardingStatus  # noqa: E402,F401
from .verification_log import VerificationLog  # noqa: E402,F401
from .notification import AdminNotification  # noqa: E402,F401
from .event import Event  # noqa: E402,F401
from .inquiry import Inquiry, InquiryResponse, InquiryTemplate  # noqa: E402,F401
from .privacy_policy import PrivacyPolicy  # noqa: E402,F401
from .search_query import SearchQuery  # noqa: E402,F401

__all__ = [
    "db",
    "User",
    "Profile",
    "BusinessProfile",
    "ContractorOnboardingStatus",
    "VerificationLog",
    "AdminNotification",
    "Event",
    "Inquiry",
    "InquiryResponse",
    "InquiryTemplate",
    "PrivacyPolicy",
    "SearchQuery",
]
