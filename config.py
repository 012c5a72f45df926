"""Application configuration module."""

import os


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///eventpros.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Rate limiting
    RATE_LIMIT = os.getenv("RATE_LIMIT", "200 per minute")
    RATELIMIT_ENABLED = True
    RATELIMIT_HEADERS_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_KEY_PREFIX = os.getenv("RATELIMIT_KEY_PREFIX", "")
    INQUIRY_RATE_LIMIT = os.getenv("INQUIRY_RATE_LIMIT", "10 per hour")
    PRIVACY_READ_RATE_LIMIT = os.getenv("PRIVACY_READ_RATE_LIMIT", "60 per minute")
    PRIVACY_WRITE_RATE_LIMIT = os.getenv("PRIVACY_WRITE_RATE_LIMIT", "10 per minute")
    ANALYTICS_RATE_LIMIT = os.getenv("ANALYTICS_RATE_LIMIT", "30 per minute")

    # Dashboard cache (disabled when REDIS_URL is unset)
    REDIS_URL = os.getenv("REDIS_URL")
    DASHBOARD_CACHE_TTL = int(os.getenv("DASHBOARD_CACHE_TTL", "300"))

    # Verification queue
    VERIFICATION_HIGH_PRIORITY_DAYS = int(
        os.getenv("VERIFICATION_HIGH_PRIORITY_DAYS", "7")
    )
    VERIFICATION_MEDIUM_PRIORITY_DAYS = int(
        os.getenv("VERIFICATION_MEDIUM_PRIORITY_DAYS", "3")
    )
