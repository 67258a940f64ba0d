"""Marshmallow schemas for tickets and payments."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from raffle_admin.models.enums import TicketStatus


class TicketSchema(Schema):
    """Serialize Ticket."""

    id = fields.Int(required=True)
    raffle_id = fields.Int(required=True)
    number = fields.Str(required=True)
    status = fields.Function(lambda obj: obj.status.value)
    customer_name = fields.Str(allow_none=True)
    customer_phone = fields.Str(allow_none=True)
    total_paid = fields.Float(required=True)


class TicketUpdateSchema(Schema):
    """Validate the sell / pay / edit payload. Every field is optional."""

    class Meta:
        unknown = EXCLUDE

    customer_name = fields.Str(load_default=None, allow_none=True)
    customer_phone = fields.Str(load_default=None, allow_none=True)
    status = fields.Str(
        load_default=None,
        allow_none=True,
        validate=validate.OneOf([s.value for s in TicketStatus]),
    )
    payment_amount = fields.Float(load_default=0, allow_none=True, validate=validate.Range(min=0))


class PaymentResultSchema(Schema):
    id = fields.Int(attribute="ticket_id")
    status = fields.Function(lambda obj: obj.status.value)
    total_paid = fields.Float()


class PaymentSchema(Schema):
    """Serialize Payment."""

    id = fields.Int(required=True)
    ticket_id = fields.Int(required=True)
    amount = fields.Float(required=True)
    payment_date = fields.DateTime(required=True)
