"""Access gate: credential checks, bearer tokens and the admin capability check."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from raffle_admin.errors import AuthenticationError, AuthorizationError, ConflictError, ValidationError
from raffle_admin.models.enums import UserRole
from raffle_admin.models.user import User
from raffle_admin.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as carried by the bearer token."""

    id: int
    username: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "username": self.username, "role": self.role.value}


@dataclass(frozen=True)
class AdminPrincipal(Principal):
    """A principal that passed :meth:`AuthService.authorize_admin`."""


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: Principal


class AuthService:
    """Login, token verification and user administration."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        token_ttl: dt.timedelta = dt.timedelta(hours=24),
        repository: UserRepository | None = None,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._token_ttl = token_ttl
        self._repo = repository or UserRepository()

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> AuthService:
        return cls(
            str(config["JWT_SECRET"]),
            algorithm=str(config.get("JWT_ALGORITHM", "HS256")),
            token_ttl=dt.timedelta(hours=int(config.get("TOKEN_TTL_HOURS", 24))),
        )

    @staticmethod
    def hash_password(password: str) -> str:
        return generate_password_hash(password)

    def issue_token(self, principal: Principal, *, now: dt.datetime | None = None) -> str:
        issued_at = now or dt.datetime.now(dt.timezone.utc)
        claims = {
            "sub": str(principal.id),
            "username": principal.username,
            "role": principal.role.value,
            "iat": issued_at,
            "exp": issued_at + self._token_ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def login(self, session: Session, username: str | None, password: str | None) -> LoginResult:
        if not username or not password:
            raise ValidationError("Username and password are required")

        user = self._repo.get_by_username(session, username)
        # Same message for unknown user and wrong password.
        if user is None or not check_password_hash(user.password_hash, password):
            logger.info("Failed login for username=%s", username)
            raise AuthenticationError(INVALID_CREDENTIALS)

        principal = Principal(id=user.id, username=user.username, role=user.role)
        return LoginResult(token=self.issue_token(principal), user=principal)

    def authenticate(self, token: str | None) -> Principal:
        """Verify a bearer token and return the caller it was issued to."""

        if not token:
            raise AuthenticationError("Token not provided")

        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as e:
            raise AuthenticationError("Invalid or expired token") from e

        try:
            return Principal(
                id=int(claims["sub"]),
                username=str(claims["username"]),
                role=UserRole(claims["role"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise AuthenticationError("Invalid or expired token") from e

    def authorize_admin(self, principal: Principal) -> AdminPrincipal:
        if not principal.is_admin:
            raise AuthorizationError("Access denied: administrator role required")
        return AdminPrincipal(id=principal.id, username=principal.username, role=principal.role)

    def create_user(
        self,
        session: Session,
        *,
        username: str | None,
        password: str | None,
        role: str | UserRole | None,
    ) -> User:
        missing = [
            field
            for field, value in (("username", username), ("password", password), ("role", role))
            if not value
        ]
        if missing:
            raise ValidationError("All fields are required", details={"missing": missing})

        try:
            user_role = UserRole(role)
        except ValueError as e:
            raise ValidationError(
                "Invalid role", details={"role": [f"Must be one of: {', '.join(r.value for r in UserRole)}"]}
            ) from e

        if self._repo.get_by_username(session, str(username)) is not None:
            raise ConflictError("Username already exists")

        try:
            user = self._repo.create(
                session,
                username=str(username),
                password_hash=self.hash_password(str(password)),
                role=user_role,
            )
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same name.
            session.rollback()
            raise ConflictError("Username already exists") from e

        logger.info("Created user id=%s username=%s role=%s", user.id, user.username, user.role.value)
        return user
