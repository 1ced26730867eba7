from marshmallow import Schema, fields, EXCLUDE

USER_UPGRADED = "user.upgraded"


class PolkaEventSchema(Schema):
    """Envelope only; `data` is checked once the event is known to need it."""

    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    data = fields.Raw(load_default=dict, allow_none=True)


class PolkaUpgradeDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.UUID(required=True)
