"""Ticket sales and the payment engine."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.orm import Session

from raffle_admin.errors import InvalidPaymentError, NotFoundError, ValidationError
from raffle_admin.models.enums import TicketStatus
from raffle_admin.models.payment import Payment
from raffle_admin.models.ticket import Ticket
from raffle_admin.repositories.raffle_repository import RaffleRepository
from raffle_admin.repositories.ticket_repository import TicketRepository
from raffle_admin.services.status_rules import derive_ticket_status
from raffle_admin.utils.money import to_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentResult:
    ticket_id: int
    status: TicketStatus
    total_paid: Decimal


class TicketService:
    """Ticket use-cases."""

    def __init__(
        self,
        repository: TicketRepository | None = None,
        raffle_repository: RaffleRepository | None = None,
    ) -> None:
        self._repo = repository or TicketRepository()
        self._raffles = raffle_repository or RaffleRepository()

    def list_tickets(self, session: Session, raffle_id: int) -> Sequence[Ticket]:
        if self._raffles.get_by_id(session, raffle_id) is None:
            raise NotFoundError(message=f"Raffle {raffle_id} not found")
        return self._repo.list_for_raffle(session, raffle_id)

    def list_payments(self, session: Session, ticket_id: int) -> Sequence[Payment]:
        if self._repo.get_by_id(session, ticket_id) is None:
            raise NotFoundError(message=f"Ticket {ticket_id} not found")
        return self._repo.list_payments(session, ticket_id)

    def apply_payment(
        self,
        session: Session,
        ticket_id: int,
        *,
        customer_name: str | None = None,
        customer_phone: str | None = None,
        requested_status: TicketStatus | str | None = None,
        payment_amount: Decimal | float | None = 0,
    ) -> PaymentResult:
        """Record a sale, a partial payment or a plain customer edit on one ticket.

        The amount is checked against the remaining balance before anything is
        written; a rejected payment leaves the ticket and ledger untouched.
        """

        amount = to_money(payment_amount)
        if amount < 0:
            raise ValidationError("payment_amount must not be negative")

        requested: TicketStatus | None = None
        if requested_status:
            try:
                requested = TicketStatus(requested_status)
            except ValueError as e:
                raise ValidationError(
                    "Invalid status",
                    details={"status": [f"Must be one of: {', '.join(s.value for s in TicketStatus)}"]},
                ) from e

        ticket = self._repo.get_for_update(session, ticket_id)
        if ticket is None:
            raise NotFoundError(message=f"Ticket {ticket_id} not found")

        ticket_value = to_money(ticket.raffle.ticket_value)
        current_total = to_money(ticket.total_paid)
        new_total = current_total + amount

        if amount > 0 and new_total > ticket_value:
            remaining = ticket_value - current_total
            raise InvalidPaymentError(
                f"Payment of {amount:,.0f} exceeds the remaining balance of {remaining:,.0f}",
                details={"payment_amount": float(amount), "remaining_balance": float(remaining)},
            )

        new_status = derive_ticket_status(
            current=ticket.status,
            requested=requested,
            new_total=new_total,
            ticket_value=ticket_value,
            payment_amount=amount,
        )

        if customer_name is not None:
            ticket.customer_name = customer_name
        if customer_phone is not None:
            ticket.customer_phone = customer_phone
        ticket.status = new_status
        ticket.total_paid = new_total

        if amount > 0:
            self._repo.add_payment(session, ticket, amount)

        session.flush()
        logger.info(
            "Ticket id=%s number=%s raffle=%s updated: status=%s total_paid=%s payment=%s",
            ticket.id,
            ticket.number,
            ticket.raffle_id,
            new_status.value,
            new_total,
            amount,
        )
        return PaymentResult(ticket_id=ticket.id, status=new_status, total_paid=new_total)
