from marshmallow import fields, post_load, validate

from models.inquiry import (
    INQUIRY_PRIORITIES,
    INQUIRY_STATUSES,
    INQUIRY_TYPES,
    RESPONSE_TYPES,
)
from schemas.base import NaiveUTCDateTime, RequestSchema
from schemas.event_schema import LocationSchema


class ServiceRequirementSchema(RequestSchema):
    category = fields.Str(required=True)
    type = fields.Str(required=True)
    description = fields.Str(allow_none=True)
    priority = fields.Str(required=True, validate=validate.OneOf(INQUIRY_PRIORITIES))
    estimated_budget = fields.Float(allow_none=True, validate=validate.Range(min=0))
    is_required = fields.Bool(required=True)


class EventDetailsSchema(RequestSchema):
    event_type = fields.Str(required=True)
    title = fields.Str(required=True)
    description = fields.Str(allow_none=True)
    event_date = NaiveUTCDateTime(required=True)
    duration_hours = fields.Float(allow_none=True, validate=validate.Range(min=0, max=168))
    attendee_count = fields.Int(allow_none=True, validate=validate.Range(min=1, max=10000))
    location = fields.Nested(LocationSchema, required=True)
    budget_total = fields.Float(allow_none=True, validate=validate.Range(min=0))
    special_requirements = fields.Str(allow_none=True)
    service_requirements = fields.List(fields.Nested(ServiceRequirementSchema))

    @post_load
    def serialize_date(self, data, **kwargs):
        # Stored in a JSON column.
        data["event_date"] = data["event_date"].isoformat()
        return data


class InquiryCreateSchema(RequestSchema):
    contractor_id = fields.Int(required=True, validate=validate.Range(min=1))
    event_id = fields.Int(load_default=None, allow_none=True)
    inquiry_type = fields.Str(required=True, validate=validate.OneOf(INQUIRY_TYPES))
    subject = fields.Str(
        required=True,
        validate=validate.Length(min=1, max=200, error="Subject must be 1-200 characters"),
    )
    message = fields.Str(
        required=True,
        validate=validate.Length(min=1, max=2000, error="Message must be 1-2000 characters"),
    )
    event_details = fields.Nested(EventDetailsSchema, load_default=None, allow_none=True)
    template_id = fields.Int(load_default=None, allow_none=True)
    priority = fields.Str(load_default="medium", validate=validate.OneOf(INQUIRY_PRIORITIES))


class InquiryQuerySchema(RequestSchema):
    status = fields.Str(load_default=None, validate=validate.OneOf(INQUIRY_STATUSES))
    inquiry_type = fields.Str(load_default=None, validate=validate.OneOf(INQUIRY_TYPES))
    priority = fields.Str(load_default=None, validate=validate.OneOf(INQUIRY_PRIORITIES))
    page = fields.Int(load_default=1, validate=validate.Range(min=1))
    limit = fields.Int(load_default=20, validate=validate.Range(min=1, max=100))


class InquiryUpdateSchema(RequestSchema):
    status = fields.Str(validate=validate.OneOf(INQUIRY_STATUSES))
    priority = fields.Str(validate=validate.OneOf(INQUIRY_PRIORITIES))


class InquiryReplySchema(RequestSchema):
    message = fields.Str(required=True, validate=validate.Length(min=1, max=2000))
    response_type = fields.Str(load_default="reply", validate=validate.OneOf(RESPONSE_TYPES))


class TemplateCreateSchema(RequestSchema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    template_type = fields.Str(required=True, validate=validate.OneOf(INQUIRY_TYPES))
    subject = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=200))
    content = fields.Str(required=True, validate=validate.Length(min=1, max=2000))
    is_public = fields.Bool(load_default=False)


class TemplateQuerySchema(RequestSchema):
    template_type = fields.Str(load_default=None, validate=validate.OneOf(INQUIRY_TYPES))
