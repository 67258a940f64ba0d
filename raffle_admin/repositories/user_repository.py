"""Repository layer for User persistence."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from raffle_admin.models.enums import UserRole
from raffle_admin.models.user import User


class UserRepository:
    """CRUD operations for User."""

    def get_by_username(self, session: Session, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return session.scalar(stmt)

    def get_by_id(self, session: Session, user_id: int) -> User | None:
        return session.get(User, user_id)

    def create(self, session: Session, *, username: str, password_hash: str, role: UserRole) -> User:
        user = User(username=username, password_hash=password_hash, role=role)
        session.add(user)
        session.flush()  # assign PK, surfaces unique violations here
        return user
