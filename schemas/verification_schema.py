from marshmallow import ValidationError, fields, validate, validates_schema

from schemas.base import RequestSchema

QUEUE_STATUSES = ("pending", "approved", "rejected", "onboarding", "all")
PRIORITIES = ("low", "medium", "high")


class QueueQuerySchema(RequestSchema):
    status = fields.Str(load_default="pending", validate=validate.OneOf(QUEUE_STATUSES))
    priority = fields.Str(load_default=None, validate=validate.OneOf(PRIORITIES))
    limit = fields.Int(load_default=20, validate=validate.Range(min=1, max=100))
    offset = fields.Int(load_default=0, validate=validate.Range(min=0))


class ApproveSchema(RequestSchema):
    reason = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=1000))


class RejectSchema(RequestSchema):
    reason = fields.Str(required=True, validate=validate.Length(min=1, max=1000))
    feedback = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=2000))


class NotificationQuerySchema(RequestSchema):
    unread_only = fields.Bool(load_default=False)
    limit = fields.Int(load_default=50, validate=validate.Range(min=1, max=100))
    offset = fields.Int(load_default=0, validate=validate.Range(min=0))


class MarkNotificationsSchema(RequestSchema):
    notification_ids = fields.List(fields.Int(), load_default=None)
    mark_all = fields.Bool(load_default=False)

    @validates_schema
    def require_target(self, data, **kwargs):
        if not data.get("mark_all") and not data.get("notification_ids"):
            raise ValidationError(
                "Provide notification_ids or set mark_all.", "notification_ids"
            )
