"""Raffle ORM model.

A raffle owns exactly 100 tickets ("00".."99") created together with it.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from raffle_admin.models.base import Base
from raffle_admin.models.enums import RaffleStatus, enum_column_type

if TYPE_CHECKING:
    from raffle_admin.models.ticket import Ticket


class Raffle(Base):
    __tablename__ = "raffles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    prize_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    ticket_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    draw_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    lottery_reference: Mapped[str | None] = mapped_column(String(200), nullable=True)
    status: Mapped[RaffleStatus] = mapped_column(
        enum_column_type(RaffleStatus, "raffle_status"),
        nullable=False,
        default=RaffleStatus.ACTIVE,
    )

    tickets: Mapped[list[Ticket]] = relationship(
        back_populates="raffle",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Ticket.number",
    )
