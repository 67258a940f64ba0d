"""Repository layer for Raffle persistence."""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from raffle_admin.models.raffle import Raffle
from raffle_admin.models.ticket import Ticket

TICKETS_PER_RAFFLE = 100


def ticket_numbers() -> list[str]:
    """The fixed number pool of every raffle: "00".."99"."""

    return [f"{i:02d}" for i in range(TICKETS_PER_RAFFLE)]


class RaffleRepository:
    """CRUD operations for Raffle."""

    def list_raffles(self, session: Session) -> Sequence[Raffle]:
        stmt = select(Raffle).order_by(Raffle.id.desc())
        return list(session.scalars(stmt).all())

    def get_by_id(self, session: Session, raffle_id: int) -> Raffle | None:
        return session.get(Raffle, raffle_id)

    def exists_any(self, session: Session) -> bool:
        return session.scalar(select(Raffle.id).limit(1)) is not None

    def create_with_tickets(
        self,
        session: Session,
        *,
        name: str,
        description: str | None,
        prize_cost: Decimal,
        ticket_value: Decimal,
        draw_date: dt.date,
        lottery_reference: str | None,
    ) -> Raffle:
        """Add a raffle and its full ticket pool to the session and flush both."""

        raffle = Raffle(
            name=name,
            description=description,
            prize_cost=prize_cost,
            ticket_value=ticket_value,
            draw_date=draw_date,
            lottery_reference=lottery_reference,
        )
        session.add(raffle)
        session.flush()  # assign PK

        session.add_all(
            Ticket(raffle_id=raffle.id, number=number, total_paid=Decimal("0.00")) for number in ticket_numbers()
        )
        session.flush()
        return raffle
