from datetime import datetime

from marshmallow import ValidationError, fields, validate, validates

from models.event import EVENT_STATUSES, EVENT_TYPES
from schemas.base import NaiveUTCDateTime, RequestSchema


class CoordinatesSchema(RequestSchema):
    lat = fields.Float(required=True, validate=validate.Range(min=-90, max=90))
    lng = fields.Float(required=True, validate=validate.Range(min=-180, max=180))


class LocationSchema(RequestSchema):
    address = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    city = fields.Str(allow_none=True)
    region = fields.Str(allow_none=True)
    country = fields.Str(allow_none=True)
    coordinates = fields.Nested(CoordinatesSchema, allow_none=True)


class EventCreateSchema(RequestSchema):
    event_type = fields.Str(
        required=True,
        validate=validate.OneOf(EVENT_TYPES, error="Please select a valid event type"),
    )
    title = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    description = fields.Str(load_default=None, allow_none=True)
    event_date = NaiveUTCDateTime(required=True)
    duration_hours = fields.Float(
        load_default=None, allow_none=True, validate=validate.Range(min=1, max=168)
    )
    attendee_count = fields.Int(
        load_default=None, allow_none=True, validate=validate.Range(min=1, max=10000)
    )
    location = fields.Nested(LocationSchema, required=True)
    budget_total = fields.Decimal(
        load_default=None, allow_none=True, places=2, validate=validate.Range(min=0)
    )
    special_requirements = fields.Str(load_default=None, allow_none=True)
    is_draft = fields.Bool(load_default=False)

    @validates("event_date")
    def validate_future(self, value, **kwargs):
        if value <= datetime.utcnow():
            raise ValidationError("Event date must be in the future.")


class EventQuerySchema(RequestSchema):
    status = fields.Str(load_default=None, validate=validate.OneOf(EVENT_STATUSES))
    event_type = fields.Str(load_default=None, validate=validate.OneOf(EVENT_TYPES))
    page = fields.Int(load_default=1, validate=validate.Range(min=1))
    limit = fields.Int(load_default=20, validate=validate.Range(min=1, max=100))


class EventUpdateSchema(EventCreateSchema):
    """Partial event update; loaded with ``partial=True``."""

    status = fields.Str(validate=validate.OneOf(EVENT_STATUSES))

    class Meta(RequestSchema.Meta):
        exclude = ("is_draft",)
