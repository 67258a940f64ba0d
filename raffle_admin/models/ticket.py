"""Ticket ORM model."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from raffle_admin.models.base import Base
from raffle_admin.models.enums import TicketStatus, enum_column_type

if TYPE_CHECKING:
    from raffle_admin.models.payment import Payment
    from raffle_admin.models.raffle import Raffle


class Ticket(Base):
    """One two-digit number within a raffle, tracked for payment progress."""

    __tablename__ = "tickets"
    __table_args__ = (
        UniqueConstraint("raffle_id", "number", name="uq_tickets_raffle_number"),
        CheckConstraint("total_paid >= 0", name="ck_tickets_total_paid_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    raffle_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("raffles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    number: Mapped[str] = mapped_column(String(2), nullable=False)  # "00".."99"
    status: Mapped[TicketStatus] = mapped_column(
        enum_column_type(TicketStatus, "ticket_status"),
        nullable=False,
        default=TicketStatus.AVAILABLE,
    )
    customer_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    customer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    total_paid: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))

    raffle: Mapped[Raffle] = relationship(back_populates="tickets")
    payments: Mapped[list[Payment]] = relationship(
        back_populates="ticket",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
