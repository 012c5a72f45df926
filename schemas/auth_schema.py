from marshmallow import fields, post_load, validate

from schemas.base import RequestSchema

SELF_SERVICE_ROLES = ("event_manager", "contractor")


class RegisterSchema(RequestSchema):
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=8))
    role = fields.Str(
        load_default="event_manager", validate=validate.OneOf(SELF_SERVICE_ROLES)
    )

    @post_load
    def normalize_email(self, data, **kwargs):
        data["email"] = data["email"].strip().lower()
        return data


class LoginSchema(RequestSchema):
    email = fields.Str(required=True, validate=validate.Length(min=1))
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=1))

    @post_load
    def normalize_email(self, data, **kwargs):
        data["email"] = data["email"].strip().lower()
        return data
