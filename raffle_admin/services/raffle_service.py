"""Raffle lifecycle: creation with its ticket pool, listing and status changes."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from raffle_admin.errors import NotFoundError, ValidationError
from raffle_admin.models.enums import RaffleStatus
from raffle_admin.models.raffle import Raffle
from raffle_admin.repositories.raffle_repository import TICKETS_PER_RAFFLE, RaffleRepository
from raffle_admin.utils.money import to_money

logger = logging.getLogger(__name__)

DEFAULT_LOTTERY_REFERENCE = "Lotería de Medellín"


def _parse_draw_date(value: dt.date | str) -> dt.date:
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value))
    except ValueError as e:
        raise ValidationError("draw_date must be an ISO date (YYYY-MM-DD)") from e


class RaffleService:
    """Raffle use-cases."""

    def __init__(
        self,
        repository: RaffleRepository | None = None,
        *,
        default_lottery_reference: str = DEFAULT_LOTTERY_REFERENCE,
    ) -> None:
        self._repo = repository or RaffleRepository()
        self._default_lottery_reference = default_lottery_reference

    def list_raffles(self, session: Session) -> Sequence[Raffle]:
        return self._repo.list_raffles(session)

    def get_raffle(self, session: Session, raffle_id: int) -> Raffle:
        raffle = self._repo.get_by_id(session, raffle_id)
        if raffle is None:
            raise NotFoundError(message=f"Raffle {raffle_id} not found")
        return raffle

    def create_raffle(
        self,
        session: Session,
        *,
        name: str | None,
        description: str | None,
        prize_cost: float | None,
        ticket_value: float | None,
        draw_date: dt.date | str | None,
        lottery_reference: str | None = None,
    ) -> int:
        """Create a raffle and its 100 tickets; returns the raffle id.

        Both inserts go through the caller's session, so they are committed or
        rolled back together.
        """

        required = {
            "name": name,
            "prize_cost": prize_cost,
            "ticket_value": ticket_value,
            "draw_date": draw_date,
        }
        missing = [field for field, value in required.items() if not value]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}",
                details={"missing": missing},
            )

        prize = to_money(prize_cost)
        price = to_money(ticket_value)
        if prize < 0 or price <= 0:
            raise ValidationError("prize_cost and ticket_value must be positive")

        raffle = self._repo.create_with_tickets(
            session,
            name=str(name),
            description=description,
            prize_cost=prize,
            ticket_value=price,
            draw_date=_parse_draw_date(draw_date),  # type: ignore[arg-type]
            lottery_reference=lottery_reference or self._default_lottery_reference,
        )
        logger.info("Created raffle id=%s name=%r with %s tickets", raffle.id, raffle.name, TICKETS_PER_RAFFLE)
        return raffle.id

    def set_status(self, session: Session, raffle_id: int, new_status: str | RaffleStatus | None) -> Raffle:
        try:
            status = RaffleStatus(new_status)
        except ValueError as e:
            raise ValidationError(
                "Invalid status", details={"status": [f"Must be one of: {', '.join(s.value for s in RaffleStatus)}"]}
            ) from e

        raffle = self.get_raffle(session, raffle_id)
        raffle.status = status
        session.flush()
        logger.info("Raffle id=%s status set to %s", raffle.id, status.value)
        return raffle
