"""Marshmallow schemas for login and user administration."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class LoginSchema(Schema):
    """Validate login payload. Presence is checked by the service."""

    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=False, load_default=None, allow_none=True)
    password = fields.Str(required=False, load_default=None, allow_none=True, load_only=True)


class UserCreateSchema(Schema):
    """Validate create-user payload."""

    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=False, load_default=None, allow_none=True)
    password = fields.Str(required=False, load_default=None, allow_none=True, load_only=True)
    role = fields.Str(required=False, load_default=None, allow_none=True)


class UserSchema(Schema):
    """Serialize User / Principal."""

    id = fields.Int(required=True)
    username = fields.Str(required=True)
    role = fields.Function(lambda obj: getattr(obj.role, "value", obj.role))


class TokenSchema(Schema):
    token = fields.Str(required=True)
    user = fields.Nested(UserSchema)
