"""Closed status and role enumerations stored as their string values."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from sqlalchemy import Enum as SAEnum


class UserRole(str, Enum):
    ADMIN = "admin"
    SELLER = "seller"


class RaffleStatus(str, Enum):
    ACTIVE = "active"
    FINISHED = "finished"


class TicketStatus(str, Enum):
    AVAILABLE = "available"
    PENDING = "pending"
    PAID = "paid"


E = TypeVar("E", bound=Enum)


def enum_column_type(enum_cls: type[E], name: str) -> SAEnum:
    """VARCHAR + CHECK column holding the enum *values* ("paid"), not names ("PAID")."""

    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        validate_strings=True,
        length=16,
        values_callable=lambda members: [m.value for m in members],
    )
