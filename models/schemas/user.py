from marshmallow import Schema, fields, pre_load, EXCLUDE


def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class _CredentialsSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    # No length or complexity policy; any non-null string is accepted
    password = fields.String(required=True, load_only=True)

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data, email=_norm_email(data["email"]))
        return data


class UserCreateSchema(_CredentialsSchema):
    pass


class UserUpdateSchema(_CredentialsSchema):
    """PUT /api/users replaces both email and password."""


class UserLoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True)
    password = fields.String(required=True, load_only=True)

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data, email=_norm_email(data["email"]))
        return data


class UserOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    email = fields.String()
    is_chirpy_red = fields.Boolean()
