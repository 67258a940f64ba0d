"""Ticket status derivation shared by the payment engine and the reports."""

from __future__ import annotations

from decimal import Decimal

from raffle_admin.models.enums import TicketStatus
from raffle_admin.utils.money import to_money


def is_settled(total_paid: Decimal | float, amount_due: Decimal | float) -> bool:
    """True once the money received covers what is owed."""

    return to_money(total_paid) >= to_money(amount_due)


def derive_ticket_status(
    *,
    current: TicketStatus,
    requested: TicketStatus | None,
    new_total: Decimal,
    ticket_value: Decimal,
    payment_amount: Decimal,
) -> TicketStatus:
    """Status a ticket ends in after an update.

    Money only drives the status when a payment is being recorded. Without a
    payment the requested status (or the current one) is kept as-is, which is
    how an administrator marks a ticket by hand.
    """

    status = requested or current

    if payment_amount > 0:
        if is_settled(new_total, ticket_value):
            return TicketStatus.PAID
        if status == TicketStatus.AVAILABLE and new_total > 0:
            return TicketStatus.PENDING

    return status
