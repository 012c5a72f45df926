from marshmallow import fields, validate

from schemas.base import NaiveUTCDateTime, RequestSchema


class PolicyCreateSchema(RequestSchema):
    version = fields.Str(required=True, validate=validate.Length(min=1, max=32))
    title = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    content = fields.Str(required=True, validate=validate.Length(min=1))
    effective_date = NaiveUTCDateTime(required=True)
    is_active = fields.Bool(load_default=False)


class PolicyUpdateSchema(RequestSchema):
    id = fields.Int(required=True)
    title = fields.Str(validate=validate.Length(min=1, max=200))
    content = fields.Str(validate=validate.Length(min=1))
    effective_date = NaiveUTCDateTime()
    is_active = fields.Bool()


class PolicyQuerySchema(RequestSchema):
    all = fields.Bool(load_default=False)
