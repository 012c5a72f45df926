"""Shared marshmallow building blocks."""

from datetime import timezone

from marshmallow import EXCLUDE, Schema, fields


class RequestSchema(Schema):
    """Base schema for request payloads; unknown keys are dropped."""

    class Meta:
        unknown = EXCLUDE


class NaiveUTCDateTime(fields.DateTime):
    """ISO 8601 datetime normalized to naive UTC for storage."""

    def _deserialize(self, value, attr, data, **kwargs):
        parsed = super()._deserialize(value, attr, data, **kwargs)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed
