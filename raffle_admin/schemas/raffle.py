"""Marshmallow schemas for Raffle."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from raffle_admin.models.enums import RaffleStatus


class RaffleSchema(Schema):
    """Serialize Raffle."""

    id = fields.Int(required=True)
    name = fields.Str(required=True)
    description = fields.Str(allow_none=True)
    prize_cost = fields.Float(required=True)
    ticket_value = fields.Float(required=True)
    draw_date = fields.Date(required=True)
    lottery_reference = fields.Str(allow_none=True)
    status = fields.Function(lambda obj: obj.status.value)


class RaffleCreateSchema(Schema):
    """Validate create-raffle payload.

    Required-ness is enforced by the service so the error can list every
    missing field at once.
    """

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(load_default=None, allow_none=True)
    description = fields.Str(load_default=None, allow_none=True)
    prize_cost = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0))
    ticket_value = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0))
    draw_date = fields.Date(load_default=None, allow_none=True)
    lottery_reference = fields.Str(load_default=None, allow_none=True)


class RaffleStatusSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    status = fields.Str(
        required=True,
        validate=validate.OneOf([s.value for s in RaffleStatus]),
    )
