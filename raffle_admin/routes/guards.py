"""Route guards: bearer-token authentication and the admin capability check."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from flask import current_app, g, request

from raffle_admin.services.auth_service import AuthService, Principal

F = TypeVar("F", bound=Callable[..., Any])


def get_auth_service() -> AuthService:
    return AuthService.from_config(current_app.config)


def _bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def current_principal() -> Principal:
    """The caller authenticated by :func:`login_required` for this request."""

    principal: Principal | None = getattr(g, "principal", None)
    if principal is None:
        raise RuntimeError("No authenticated principal for this request")
    return principal


def login_required(view: F) -> F:
    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        g.principal = get_auth_service().authenticate(_bearer_token())
        return view(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def admin_required(view: F) -> F:
    """Authenticate, then require the admin role. Implies :func:`login_required`."""

    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        service = get_auth_service()
        principal = service.authenticate(_bearer_token())
        g.principal = service.authorize_admin(principal)
        return view(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
