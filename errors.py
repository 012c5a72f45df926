"""HTTP error types raised by route handlers."""

from __future__ import annotations

from werkzeug.exceptions import BadRequest, InternalServerError


class ValidationError(BadRequest):
    """Request payload failed schema validation."""

    def __init__(self, errors: dict | list, description: str = "Validation failed"):
        super().__init__(description=description)
        self.errors = errors


class DownstreamError(InternalServerError):
    """A database call failed; the underlying detail is logged, not returned."""

    def __init__(self, operation: str):
        super().__init__(description=f"Failed to {operation}.")
        self.operation = operation


def flatten_errors(messages: dict, prefix: str = "") -> list[dict[str, str]]:
    """Turn marshmallow's nested error dict into ``[{field, message}]``."""

    flattened: list[dict[str, str]] = []
    for field, value in messages.items():
        path = f"{prefix}.{field}" if prefix else str(field)
        if isinstance(value, dict):
            flattened.extend(flatten_errors(value, path))
        elif isinstance(value, list):
            for message in value:
                if isinstance(message, dict):
                    flattened.extend(flatten_errors(message, path))
                else:
                    flattened.append({"field": path, "message": str(message)})
        else:
            flattened.append({"field": path, "message": str(value)})
    return flattened
