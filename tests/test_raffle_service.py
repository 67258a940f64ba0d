import datetime as dt

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from raffle_admin.errors import NotFoundError, ValidationError
from raffle_admin.models import Raffle, Ticket
from raffle_admin.models.enums import RaffleStatus, TicketStatus
from raffle_admin.repositories.raffle_repository import RaffleRepository
from raffle_admin.services.raffle_service import RaffleService


def _create(session: Session, **overrides) -> int:
    data = {
        'name': 'Rifa navideña',
        'description': 'Televisor',
        'prize_cost': 2000000,
        'ticket_value': 20000,
        'draw_date': '2026-12-24',
    }
    data.update(overrides)
    return RaffleService().create_raffle(session, **data)


def test_create_raffle_builds_full_ticket_pool(db_session: Session):
    raffle_id = _create(db_session)

    raffle = db_session.get(Raffle, raffle_id)
    tickets = db_session.scalars(
        select(Ticket).where(Ticket.raffle_id == raffle_id).order_by(Ticket.number)
    ).all()

    assert raffle.status == RaffleStatus.ACTIVE
    assert raffle.draw_date == dt.date(2026, 12, 24)
    assert raffle.lottery_reference == 'Lotería de Medellín'
    assert [t.number for t in tickets] == [f'{i:02d}' for i in range(100)]
    assert all(t.status == TicketStatus.AVAILABLE for t in tickets)
    assert all(t.total_paid == 0 for t in tickets)
    assert all(t.customer_name is None for t in tickets)


def test_create_raffle_keeps_given_lottery_reference(db_session: Session):
    raffle_id = _create(db_session, lottery_reference='Lotería de Bogotá')

    assert db_session.get(Raffle, raffle_id).lottery_reference == 'Lotería de Bogotá'


def test_create_raffle_lists_every_missing_field(db_session: Session):
    with pytest.raises(ValidationError) as exc_info:
        RaffleService().create_raffle(
            db_session,
            name='',
            description=None,
            prize_cost=None,
            ticket_value=0,
            draw_date=None,
        )

    assert exc_info.value.details['missing'] == ['name', 'prize_cost', 'ticket_value', 'draw_date']
    assert db_session.scalar(select(func.count()).select_from(Raffle)) == 0


def test_create_raffle_rejects_bad_date(db_session: Session):
    with pytest.raises(ValidationError):
        _create(db_session, draw_date='24/12/2026')


def test_failed_ticket_insert_rolls_back_raffle(session_factory):
    class ExplodingRepository(RaffleRepository):
        def create_with_tickets(self, session, **kwargs):
            raffle = Raffle(**kwargs)
            session.add(raffle)
            session.flush()
            session.add(Ticket(raffle_id=raffle.id, number='00'))
            session.add(Ticket(raffle_id=raffle.id, number='00'))
            session.flush()
            return raffle

    with pytest.raises(Exception):
        with session_factory.begin() as session:
            RaffleService(ExplodingRepository()).create_raffle(
                session,
                name='Rota',
                description=None,
                prize_cost=10,
                ticket_value=10,
                draw_date='2026-01-01',
            )

    with session_factory() as session:
        assert session.scalar(select(func.count()).select_from(Raffle)) == 0
        assert session.scalar(select(func.count()).select_from(Ticket)) == 0


def test_set_status(db_session: Session):
    raffle_id = _create(db_session)
    service = RaffleService()

    raffle = service.set_status(db_session, raffle_id, 'finished')

    assert raffle.status == RaffleStatus.FINISHED
    tickets = db_session.scalars(select(Ticket).where(Ticket.raffle_id == raffle_id)).all()
    assert all(t.status == TicketStatus.AVAILABLE for t in tickets)


def test_set_status_rejects_unknown_value(db_session: Session):
    raffle_id = _create(db_session)

    with pytest.raises(ValidationError):
        RaffleService().set_status(db_session, raffle_id, 'cancelled')


def test_set_status_unknown_raffle(db_session: Session):
    with pytest.raises(NotFoundError):
        RaffleService().set_status(db_session, 404, 'finished')


def test_list_raffles_newest_first(db_session: Session):
    first = _create(db_session, name='Primera')
    second = _create(db_session, name='Segunda')

    raffles = RaffleService().list_raffles(db_session)

    assert [r.id for r in raffles] == [second, first]
