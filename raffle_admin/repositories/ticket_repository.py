"""Repository layer for Ticket and Payment persistence."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from raffle_admin.models.payment import Payment
from raffle_admin.models.ticket import Ticket


class TicketRepository:
    """Reads and writes for tickets and their payment ledger."""

    def list_for_raffle(self, session: Session, raffle_id: int) -> Sequence[Ticket]:
        stmt = select(Ticket).where(Ticket.raffle_id == raffle_id).order_by(Ticket.number.asc())
        return list(session.scalars(stmt).all())

    def get_by_id(self, session: Session, ticket_id: int) -> Ticket | None:
        return session.get(Ticket, ticket_id)

    def get_for_update(self, session: Session, ticket_id: int) -> Ticket | None:
        """Load a ticket with its raffle, locking the row where the backend supports it."""

        stmt = (
            select(Ticket)
            .options(joinedload(Ticket.raffle))
            .where(Ticket.id == ticket_id)
            .with_for_update(of=Ticket)
        )
        return session.scalar(stmt)

    def add_payment(self, session: Session, ticket: Ticket, amount: Decimal) -> Payment:
        payment = Payment(ticket_id=ticket.id, amount=amount)
        session.add(payment)
        return payment

    def list_payments(self, session: Session, ticket_id: int) -> Sequence[Payment]:
        stmt = (
            select(Payment)
            .where(Payment.ticket_id == ticket_id)
            .order_by(Payment.payment_date.desc(), Payment.id.desc())
        )
        return list(session.scalars(stmt).all())
