"""Seed data for an empty store: the default admin and one sample raffle."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from raffle_admin.models.enums import UserRole
from raffle_admin.repositories.raffle_repository import RaffleRepository
from raffle_admin.repositories.user_repository import UserRepository
from raffle_admin.services.auth_service import AuthService
from raffle_admin.services.raffle_service import RaffleService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedResult:
    admin_created: bool
    sample_raffle_id: int | None


def seed_defaults(
    session: Session,
    *,
    admin_username: str,
    admin_password: str,
    lottery_reference: str,
) -> SeedResult:
    """Create missing bootstrap rows. Safe to run on every start."""

    users = UserRepository()
    admin_created = False
    if users.get_by_username(session, admin_username) is None:
        users.create(
            session,
            username=admin_username,
            password_hash=AuthService.hash_password(admin_password),
            role=UserRole.ADMIN,
        )
        admin_created = True
        logger.info("Default admin created: %s", admin_username)

    sample_raffle_id: int | None = None
    if not RaffleRepository().exists_any(session):
        service = RaffleService(default_lottery_reference=lottery_reference)
        sample_raffle_id = service.create_raffle(
            session,
            name="Gran Rifa de Inauguración",
            description="iPhone 15 Pro Max",
            prize_cost=5_000_000,
            ticket_value=50_000,
            draw_date=dt.date(2026, 12, 24),
            lottery_reference=lottery_reference,
        )
        logger.info("Sample raffle created: id=%s", sample_raffle_id)

    return SeedResult(admin_created=admin_created, sample_raffle_id=sample_raffle_id)
