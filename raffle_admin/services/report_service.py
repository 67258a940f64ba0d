"""Per-raffle collection statistics, buyer lists and the wallet ledger."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy.orm import Session

from raffle_admin.errors import NotFoundError
from raffle_admin.models.enums import TicketStatus
from raffle_admin.models.raffle import Raffle
from raffle_admin.models.ticket import Ticket
from raffle_admin.repositories.raffle_repository import RaffleRepository
from raffle_admin.repositories.ticket_repository import TicketRepository
from raffle_admin.services.status_rules import is_settled
from raffle_admin.utils.money import to_money

CustomerKey = tuple[str | None, str | None]


@dataclass(frozen=True)
class RaffleStats:
    total_tickets: int
    sold_count: int
    paid_count: int
    total_collected: Decimal
    projected_revenue: Decimal
    total_pending: Decimal
    occupation_percentage: float
    projected_utility: Decimal
    real_utility: Decimal


@dataclass(frozen=True)
class CustomerGroup:
    customer_name: str | None
    customer_phone: str | None
    numbers: list[str]
    ticket_count: int
    total_purchase: Decimal
    total_paid: Decimal
    balance: Decimal
    status: TicketStatus


@dataclass(frozen=True)
class DashboardResult:
    raffle: Raffle
    stats: RaffleStats
    pending_customers: list[CustomerGroup] = field(default_factory=list)
    paid_customers: list[CustomerGroup] = field(default_factory=list)


def group_by_customer(tickets: Iterable[Ticket], ticket_value: Decimal) -> list[CustomerGroup]:
    """Group tickets by (customer_name, customer_phone), keeping first-seen order."""

    buckets: dict[CustomerKey, list[Ticket]] = {}
    for t in tickets:
        buckets.setdefault((t.customer_name, t.customer_phone), []).append(t)

    groups: list[CustomerGroup] = []
    for (name, phone), owned in buckets.items():
        count = len(owned)
        total_purchase = count * to_money(ticket_value)
        total_paid = sum((to_money(t.total_paid) for t in owned), Decimal("0.00"))
        groups.append(
            CustomerGroup(
                customer_name=name,
                customer_phone=phone,
                numbers=sorted(t.number for t in owned),
                ticket_count=count,
                total_purchase=total_purchase,
                total_paid=total_paid,
                balance=total_purchase - total_paid,
                status=TicketStatus.PAID if is_settled(total_paid, total_purchase) else TicketStatus.PENDING,
            )
        )
    return groups


def compute_stats(raffle: Raffle, tickets: Sequence[Ticket]) -> RaffleStats:
    ticket_value = to_money(raffle.ticket_value)
    prize_cost = to_money(raffle.prize_cost)

    total_tickets = len(tickets)
    sold_count = sum(1 for t in tickets if t.status != TicketStatus.AVAILABLE)
    paid_count = sum(1 for t in tickets if t.status == TicketStatus.PAID)
    total_collected = sum((to_money(t.total_paid) for t in tickets), Decimal("0.00"))

    projected_revenue = sold_count * ticket_value
    occupation = sold_count * 100 / total_tickets if total_tickets else 0.0

    return RaffleStats(
        total_tickets=total_tickets,
        sold_count=sold_count,
        paid_count=paid_count,
        total_collected=total_collected,
        projected_revenue=projected_revenue,
        total_pending=projected_revenue - total_collected,
        occupation_percentage=occupation,
        projected_utility=projected_revenue - prize_cost,
        real_utility=total_collected - prize_cost,
    )


class ReportService:
    """Read-only views derived from a raffle's tickets."""

    def __init__(
        self,
        raffle_repository: RaffleRepository | None = None,
        ticket_repository: TicketRepository | None = None,
    ) -> None:
        self._raffles = raffle_repository or RaffleRepository()
        self._tickets = ticket_repository or TicketRepository()

    def _load(self, session: Session, raffle_id: int) -> tuple[Raffle, Sequence[Ticket]]:
        raffle = self._raffles.get_by_id(session, raffle_id)
        if raffle is None:
            raise NotFoundError(message=f"Raffle {raffle_id} not found")
        return raffle, self._tickets.list_for_raffle(session, raffle_id)

    def get_dashboard(self, session: Session, raffle_id: int) -> DashboardResult:
        raffle, tickets = self._load(session, raffle_id)
        ticket_value = to_money(raffle.ticket_value)

        pending = [t for t in tickets if t.status == TicketStatus.PENDING]
        paid = [t for t in tickets if t.status == TicketStatus.PAID]

        return DashboardResult(
            raffle=raffle,
            stats=compute_stats(raffle, tickets),
            pending_customers=group_by_customer(pending, ticket_value),
            paid_customers=group_by_customer(paid, ticket_value),
        )

    def get_wallet(self, session: Session, raffle_id: int) -> list[CustomerGroup]:
        """Every buyer with their purchase, payments and outstanding balance.

        Rows are ordered by balance, largest debtors first.
        """

        raffle, tickets = self._load(session, raffle_id)
        sold = [t for t in tickets if t.status != TicketStatus.AVAILABLE]
        rows = group_by_customer(sold, to_money(raffle.ticket_value))
        return sorted(rows, key=lambda row: row.balance, reverse=True)
