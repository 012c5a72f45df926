"""Application factory."""

import json
import os
import uuid

from flask import Flask, jsonify, g, request
from werkzeug.exceptions import HTTPException, Unauthorized

from config import Config
from errors import DownstreamError, ValidationError
from extensions import cache, cors, jwt, limiter, migrate
from models import db
from routes.admin_verification import admin_verification_bp
from routes.analytics import analytics_bp
from routes.auth import auth_bp
from routes.events import events_bp
from routes.inquiries import inquiries_bp
from routes.onboarding import onboarding_bp
from routes.privacy import privacy_bp


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    cache.init_app(app)

    # CORS
    cors.init_app(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Rate limiting
    if not app.config.get("RATELIMIT_KEY_PREFIX"):
        app.config["RATELIMIT_KEY_PREFIX"] = str(uuid.uuid4())
    limiter.init_app(app)

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(
        admin_verification_bp, url_prefix="/api/admin/verification"
    )
    app.register_blueprint(onboarding_bp, url_prefix="/api/onboarding")
    app.register_blueprint(events_bp, url_prefix="/api/events")
    app.register_blueprint(inquiries_bp, url_prefix="/api/inquiries")
    app.register_blueprint(privacy_bp, url_prefix="/api/privacy")
    app.register_blueprint(analytics_bp, url_prefix="/api/analytics")

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_error_handlers(app)
    _register_jwt_handlers()

    return app


def _error_payload(error: HTTPException, request_id: str) -> dict:
    payload = {
        "success": False,
        "error": getattr(error, "name", "Error"),
        "message": error.description,
        "detail": error.description,
        "request_id": request_id,
    }
    if isinstance(error, ValidationError):
        payload["errors"] = error.errors
    return payload


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        request_id = g.get("request_id") or str(uuid.uuid4())
        if isinstance(error, DownstreamError):
            app.logger.error(
                "Downstream failure during %s (request %s)",
                error.operation,
                request_id,
                exc_info=error.__cause__,
            )
        response = error.get_response()
        response.data = json.dumps(_error_payload(error, request_id))
        response.content_type = "application/json"
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):
        request_id = g.get("request_id") or str(uuid.uuid4())
        app.logger.exception("Unhandled application error", exc_info=error)
        payload = {
            "success": False,
            "error": "Internal Server Error",
            "message": "An unexpected error occurred.",
            "detail": "An unexpected error occurred.",
            "request_id": request_id,
        }
        response = jsonify(payload)
        response.status_code = 500
        response.headers.setdefault("X-Request-ID", request_id)
        return response


def _register_jwt_handlers() -> None:
    """Render flask-jwt-extended failures with the same JSON envelope."""

    def _unauthorized(reason: str):
        request_id = g.get("request_id") or str(uuid.uuid4())
        error = Unauthorized(reason)
        response = jsonify(_error_payload(error, request_id))
        response.status_code = 401
        return response

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _unauthorized(reason)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return _unauthorized(reason)

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return _unauthorized("Token has expired.")


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
