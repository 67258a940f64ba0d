"""Dashboard routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint

from raffle_admin.db import get_session
from raffle_admin.routes.guards import login_required
from raffle_admin.schemas.dashboard import DashboardSchema, WalletRowSchema
from raffle_admin.services.report_service import ReportService
from raffle_admin.utils.responses import ok

dashboard_bp = Blueprint("dashboard", __name__)

_dashboard_schema = DashboardSchema()
_wallet_schema = WalletRowSchema(many=True)
_service = ReportService()


@dashboard_bp.get("/<int:raffle_id>")
@login_required
def get_dashboard(raffle_id: int):
    """Collection statistics and buyer lists for one raffle."""

    result = _service.get_dashboard(get_session(), raffle_id)
    return ok(_dashboard_schema.dump(result))


@dashboard_bp.get("/wallet/<int:raffle_id>")
@login_required
def get_wallet(raffle_id: int):
    """Buyers ordered by outstanding balance, largest first."""

    rows = _service.get_wallet(get_session(), raffle_id)
    return ok(_wallet_schema.dump(rows))
