from marshmallow import fields, post_load, validate

from schemas.base import RequestSchema

PERIOD_DAYS = {"1d": 1, "7d": 7, "30d": 30, "90d": 90}


class SearchAnalyticsQuerySchema(RequestSchema):
    period = fields.Str(load_default="7d", validate=validate.OneOf(tuple(PERIOD_DAYS)))
    limit = fields.Int(load_default=10, validate=validate.Range(min=1, max=50))


class SearchRecordSchema(RequestSchema):
    query = fields.Str(
        required=True,
        validate=[
            validate.Length(min=1, max=255),
            validate.Regexp(r".*\S", error="Query cannot be blank"),
        ],
    )
    filters = fields.Dict(keys=fields.Str(), load_default=dict)
    result_count = fields.Int(load_default=0, validate=validate.Range(min=0))

    @post_load
    def strip_query(self, data, **kwargs):
        data["query"] = data["query"].strip()
        return data
