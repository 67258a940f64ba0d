"""Auth routes: login and staff user administration."""

from __future__ import annotations

from flask import Blueprint, request

from raffle_admin.db import get_session
from raffle_admin.routes.guards import admin_required, current_principal, get_auth_service, login_required
from raffle_admin.schemas.auth import LoginSchema, TokenSchema, UserCreateSchema, UserSchema
from raffle_admin.utils.responses import ok

auth_bp = Blueprint("auth", __name__)

_login_schema = LoginSchema()
_token_schema = TokenSchema()
_user_create_schema = UserCreateSchema()
_user_schema = UserSchema()


@auth_bp.post("/login")
def login():
    """Exchange username/password for a bearer token."""

    data = _login_schema.load(request.get_json(silent=True) or {})
    result = get_auth_service().login(get_session(), data["username"], data["password"])
    return ok(_token_schema.dump(result))


@auth_bp.get("/me")
@login_required
def me():
    return ok(_user_schema.dump(current_principal()))


@auth_bp.post("/users")
@admin_required
def create_user():
    """Create a staff account (admin only)."""

    data = _user_create_schema.load(request.get_json(silent=True) or {})
    user = get_auth_service().create_user(
        get_session(),
        username=data["username"],
        password=data["password"],
        role=data["role"],
    )
    return ok(_user_schema.dump(user), status_code=201)
