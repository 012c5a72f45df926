"""Flask extension instances shared by the app factory and blueprints."""

from flask import current_app
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate

from cache import RedisCache


def _default_rate_limit() -> str:
    return current_app.config["RATE_LIMIT"]


migrate = Migrate()
jwt = JWTManager()
cors = CORS()
# Resolved per request so every app built by the factory keeps its own limit.
limiter = Limiter(key_func=get_remote_address, default_limits=[_default_rate_limit])
cache = RedisCache()
