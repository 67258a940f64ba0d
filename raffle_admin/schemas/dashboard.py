"""Schemas for dashboard and wallet reports."""

from __future__ import annotations

from marshmallow import Schema, fields

from raffle_admin.schemas.raffle import RaffleSchema


class StatsSchema(Schema):
    total_tickets = fields.Int()
    sold_count = fields.Int()
    paid_count = fields.Int()
    total_collected = fields.Float()
    projected_revenue = fields.Float()
    total_pending = fields.Float()
    occupation_percentage = fields.Float()
    projected_utility = fields.Float()
    real_utility = fields.Float()


class PendingCustomerSchema(Schema):
    customer_name = fields.Str(allow_none=True)
    customer_phone = fields.Str(allow_none=True)
    numbers = fields.List(fields.Str())
    balance = fields.Float()


class PaidCustomerSchema(Schema):
    customer_name = fields.Str(allow_none=True)
    customer_phone = fields.Str(allow_none=True)
    numbers = fields.List(fields.Str())


class DashboardSchema(Schema):
    raffle = fields.Nested(RaffleSchema)
    stats = fields.Nested(StatsSchema)
    pending_customers = fields.List(fields.Nested(PendingCustomerSchema))
    paid_customers = fields.List(fields.Nested(PaidCustomerSchema))


class WalletRowSchema(Schema):
    customer_name = fields.Str(allow_none=True)
    customer_phone = fields.Str(allow_none=True)
    numbers = fields.List(fields.Str())
    ticket_count = fields.Int()
    total_purchase = fields.Float()
    total_paid = fields.Float()
    balance = fields.Float()
    status = fields.Function(lambda obj: obj.status.value)
