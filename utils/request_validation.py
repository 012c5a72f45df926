"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Mapping

from flask import Request
from marshmallow import Schema
from marshmallow import ValidationError as SchemaValidationError
from werkzeug.exceptions import BadRequest

from errors import ValidationError, flatten_errors


def parse_json_request(req: Request, *, allow_empty: bool = False) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    return data


def load_with_schema(
    schema: Schema, data: Mapping, *, partial: bool = False, message: str | None = None
) -> dict:
    """Deserialize ``data`` or raise a 400 carrying field-level errors."""

    try:
        return schema.load(data, partial=partial)
    except SchemaValidationError as exc:
        raise ValidationError(
            flatten_errors(exc.normalized_messages()),
            description=message or "Validation failed",
        ) from exc


def load_json(req: Request, schema: Schema, *, partial: bool = False) -> dict:
    """Parse the JSON body of ``req`` and validate it against ``schema``."""

    return load_with_schema(
        schema, parse_json_request(req, allow_empty=True), partial=partial
    )


def load_query(req: Request, schema: Schema) -> dict:
    """Validate query-string arguments against ``schema``."""

    return load_with_schema(
        schema, req.args.to_dict(), message="Invalid query parameters"
    )
