"""Raffle routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from raffle_admin.db import get_session
from raffle_admin.routes.guards import admin_required, login_required
from raffle_admin.schemas.raffle import RaffleCreateSchema, RaffleSchema, RaffleStatusSchema
from raffle_admin.services.raffle_service import RaffleService
from raffle_admin.utils.responses import ok

raffles_bp = Blueprint("raffles", __name__)

_raffle_schema = RaffleSchema()
_raffles_schema = RaffleSchema(many=True)
_create_schema = RaffleCreateSchema()
_status_schema = RaffleStatusSchema()


def _service() -> RaffleService:
    return RaffleService(default_lottery_reference=current_app.config["DEFAULT_LOTTERY_REFERENCE"])


@raffles_bp.get("")
@login_required
def list_raffles():
    """List all raffles, newest first."""

    raffles = _service().list_raffles(get_session())
    return ok(_raffles_schema.dump(raffles))


@raffles_bp.get("/<int:raffle_id>")
@login_required
def get_raffle(raffle_id: int):
    raffle = _service().get_raffle(get_session(), raffle_id)
    return ok(_raffle_schema.dump(raffle))


@raffles_bp.post("")
@admin_required
def create_raffle():
    """Create a raffle together with its 100 tickets."""

    data = _create_schema.load(request.get_json(silent=True) or {})
    raffle_id = _service().create_raffle(get_session(), **data)

    # Commit occurs in teardown if no exception.
    return ok({"id": raffle_id}, status_code=201)


@raffles_bp.patch("/<int:raffle_id>/status")
@admin_required
def update_status(raffle_id: int):
    data = _status_schema.load(request.get_json(silent=True) or {})
    raffle = _service().set_status(get_session(), raffle_id, data["status"])
    return ok({"id": raffle.id, "status": raffle.status.value})
