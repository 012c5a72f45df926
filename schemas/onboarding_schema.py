from marshmallow import fields, validate

from schemas.base import RequestSchema


class OnboardingStepsSchema(RequestSchema):
    step1_completed = fields.Bool()
    step2_completed = fields.Bool()
    step3_completed = fields.Bool()
    step4_completed = fields.Bool()


class ProfileSchema(RequestSchema):
    first_name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    last_name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    phone = fields.Str(allow_none=True, validate=validate.Length(max=32))
    address = fields.Str(allow_none=True, validate=validate.Length(max=255))
    bio = fields.Str(allow_none=True, validate=validate.Length(max=2000))
    avatar_url = fields.Url(allow_none=True)
    location = fields.Str(allow_none=True, validate=validate.Length(max=255))
    timezone = fields.Str(validate=validate.Length(min=1, max=64))


class BusinessProfileSchema(RequestSchema):
    company_name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    description = fields.Str(allow_none=True, validate=validate.Length(max=5000))
    website = fields.Url(allow_none=True)
    location = fields.Str(allow_none=True, validate=validate.Length(max=255))
    business_address = fields.Str(allow_none=True, validate=validate.Length(max=255))
    nzbn = fields.Str(
        allow_none=True,
        validate=validate.Regexp(r"^\d{13}$", error="NZBN must be 13 digits."),
    )
    service_areas = fields.List(fields.Str(validate=validate.Length(min=1)))
