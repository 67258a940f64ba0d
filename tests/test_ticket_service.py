import threading
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from raffle_admin.errors import InvalidPaymentError, NotFoundError, ValidationError
from raffle_admin.models import Payment, Ticket
from raffle_admin.models.enums import TicketStatus
from raffle_admin.services.raffle_service import RaffleService
from raffle_admin.services.ticket_service import TicketService
from tests.conftest import TICKET_VALUE


def _ticket(session: Session, raffle_id: int, number: str) -> Ticket:
    return session.scalar(
        select(Ticket).where(Ticket.raffle_id == raffle_id, Ticket.number == number)
    )


def _payment_count(session: Session, ticket_id: int) -> int:
    return session.scalar(
        select(func.count()).select_from(Payment).where(Payment.ticket_id == ticket_id)
    )


def test_partial_then_full_payment_then_overpayment(db_session: Session, raffle_id: int):
    service = TicketService()
    ticket = _ticket(db_session, raffle_id, '00')

    first = service.apply_payment(
        db_session,
        ticket.id,
        customer_name='Ana',
        customer_phone='3001234567',
        payment_amount=30000,
    )
    assert first.status == TicketStatus.PENDING
    assert first.total_paid == 30000

    second = service.apply_payment(db_session, ticket.id, payment_amount=20000)
    assert second.status == TicketStatus.PAID
    assert second.total_paid == TICKET_VALUE

    with pytest.raises(InvalidPaymentError):
        service.apply_payment(db_session, ticket.id, payment_amount=1000)

    db_session.refresh(ticket)
    assert ticket.total_paid == TICKET_VALUE
    assert ticket.status == TicketStatus.PAID
    assert _payment_count(db_session, ticket.id) == 2


def test_overpayment_on_fresh_ticket_changes_nothing(db_session: Session, raffle_id: int):
    service = TicketService()
    ticket = _ticket(db_session, raffle_id, '42')

    with pytest.raises(InvalidPaymentError) as exc_info:
        service.apply_payment(
            db_session, ticket.id, customer_name='Luis', payment_amount=TICKET_VALUE + 1
        )

    assert exc_info.value.details['remaining_balance'] == TICKET_VALUE
    db_session.refresh(ticket)
    assert ticket.total_paid == 0
    assert ticket.status == TicketStatus.AVAILABLE
    assert ticket.customer_name is None
    assert _payment_count(db_session, ticket.id) == 0


def test_exact_payment_marks_paid_even_if_other_status_requested(
    db_session: Session, raffle_id: int
):
    ticket = _ticket(db_session, raffle_id, '07')

    result = TicketService().apply_payment(
        db_session, ticket.id, requested_status='pending', payment_amount=TICKET_VALUE
    )

    assert result.status == TicketStatus.PAID


def test_metadata_edit_writes_no_ledger_entry(db_session: Session, raffle_id: int):
    service = TicketService()
    ticket = _ticket(db_session, raffle_id, '10')
    service.apply_payment(
        db_session, ticket.id, customer_name='Ana', customer_phone='300', payment_amount=10000
    )

    result = service.apply_payment(db_session, ticket.id, customer_phone='311')

    db_session.refresh(ticket)
    assert result.status == TicketStatus.PENDING
    assert result.total_paid == 10000
    assert ticket.customer_name == 'Ana'
    assert ticket.customer_phone == '311'
    assert _payment_count(db_session, ticket.id) == 1


def test_reservation_without_payment_keeps_requested_status(
    db_session: Session, raffle_id: int
):
    ticket = _ticket(db_session, raffle_id, '11')

    result = TicketService().apply_payment(
        db_session, ticket.id, customer_name='Sara', requested_status='pending'
    )

    assert result.status == TicketStatus.PENDING
    assert result.total_paid == 0
    assert _payment_count(db_session, ticket.id) == 0


def test_manual_paid_override_without_money(db_session: Session, raffle_id: int):
    ticket = _ticket(db_session, raffle_id, '12')

    result = TicketService().apply_payment(db_session, ticket.id, requested_status='paid')

    assert result.status == TicketStatus.PAID
    assert result.total_paid == 0


def test_unknown_ticket(db_session: Session, raffle_id: int):
    with pytest.raises(NotFoundError):
        TicketService().apply_payment(db_session, 999999, payment_amount=1000)


def test_negative_amount_rejected(db_session: Session, raffle_id: int):
    ticket = _ticket(db_session, raffle_id, '13')

    with pytest.raises(ValidationError):
        TicketService().apply_payment(db_session, ticket.id, payment_amount=-5)


def test_invalid_requested_status_rejected(db_session: Session, raffle_id: int):
    ticket = _ticket(db_session, raffle_id, '14')

    with pytest.raises(ValidationError):
        TicketService().apply_payment(db_session, ticket.id, requested_status='sold')


def test_payment_history_is_per_ticket_and_sums_to_total(db_session: Session, raffle_id: int):
    service = TicketService()
    a = _ticket(db_session, raffle_id, '20')
    b = _ticket(db_session, raffle_id, '21')
    service.apply_payment(db_session, a.id, payment_amount=10000)
    service.apply_payment(db_session, a.id, payment_amount=15000)
    service.apply_payment(db_session, b.id, payment_amount=5000)

    payments = service.list_payments(db_session, a.id)

    assert len(payments) == 2
    assert {p.ticket_id for p in payments} == {a.id}
    assert sum(p.amount for p in payments) == 25000
    db_session.refresh(a)
    assert a.total_paid == 25000


def test_list_tickets_ordered_by_number(db_session: Session, raffle_id: int):
    tickets = TicketService().list_tickets(db_session, raffle_id)

    numbers = [t.number for t in tickets]
    assert numbers == sorted(numbers)
    assert numbers[0] == '00'
    assert numbers[-1] == '99'


def test_list_tickets_unknown_raffle(db_session: Session):
    with pytest.raises(NotFoundError):
        TicketService().list_tickets(db_session, 12345)


def test_fractional_payments_settle_exactly(db_session: Session):
    raffle_id = RaffleService().create_raffle(
        db_session,
        name='Rifa de centavos',
        description=None,
        prize_cost=1,
        ticket_value=0.3,
        draw_date='2026-12-24',
    )
    service = TicketService()
    ticket = _ticket(db_session, raffle_id, '00')

    service.apply_payment(db_session, ticket.id, customer_name='Ana', payment_amount=0.1)
    result = service.apply_payment(db_session, ticket.id, payment_amount=0.2)

    assert result.status == TicketStatus.PAID
    assert result.total_paid == Decimal('0.30')
    with pytest.raises(InvalidPaymentError):
        service.apply_payment(db_session, ticket.id, payment_amount=0.01)


def test_concurrent_payments_cannot_exceed_ticket_value(
    session_factory: sessionmaker[Session], raffle_id: int
):
    with session_factory() as session:
        ticket_id = _ticket(session, raffle_id, '30').id

    service = TicketService()
    barrier = threading.Barrier(2)
    outcomes: list[str] = []
    errors: list[BaseException] = []

    def pay() -> None:
        barrier.wait()
        try:
            with session_factory.begin() as session:
                service.apply_payment(session, ticket_id, payment_amount=30000)
        except InvalidPaymentError:
            outcomes.append('rejected')
        except BaseException as e:
            errors.append(e)
        else:
            outcomes.append('ok')

    threads = [threading.Thread(target=pay) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert errors == []
    assert sorted(outcomes) == ['ok', 'rejected']
    with session_factory() as session:
        ticket = session.get(Ticket, ticket_id)
        assert ticket.total_paid == 30000
        assert ticket.status == TicketStatus.PENDING
        assert _payment_count(session, ticket_id) == 1
