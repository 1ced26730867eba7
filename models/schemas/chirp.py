from marshmallow import Schema, fields, validate, EXCLUDE


class ChirpCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    # Max length depends on config and is checked in the route
    body = fields.String(
        required=True,
        validate=validate.Length(min=1, error="Body is required"),
    )


class ChirpOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    body = fields.String()
    user_id = fields.String()
