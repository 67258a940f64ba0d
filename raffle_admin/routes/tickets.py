"""Ticket routes: listing, selling / paying, and payment history."""

from __future__ import annotations

from flask import Blueprint, request

from raffle_admin.db import get_session
from raffle_admin.routes.guards import login_required
from raffle_admin.schemas.ticket import PaymentResultSchema, PaymentSchema, TicketSchema, TicketUpdateSchema
from raffle_admin.services.ticket_service import TicketService
from raffle_admin.utils.responses import ok

tickets_bp = Blueprint("tickets", __name__)

_tickets_schema = TicketSchema(many=True)
_update_schema = TicketUpdateSchema()
_result_schema = PaymentResultSchema()
_payments_schema = PaymentSchema(many=True)
_service = TicketService()


@tickets_bp.get("/raffle/<int:raffle_id>")
@login_required
def list_tickets(raffle_id: int):
    tickets = _service.list_tickets(get_session(), raffle_id)
    return ok(_tickets_schema.dump(tickets))


@tickets_bp.patch("/<int:ticket_id>")
@login_required
def update_ticket(ticket_id: int):
    """Assign a customer, change the status and/or record a payment."""

    data = _update_schema.load(request.get_json(silent=True) or {})
    result = _service.apply_payment(
        get_session(),
        ticket_id,
        customer_name=data["customer_name"],
        customer_phone=data["customer_phone"],
        requested_status=data["status"],
        payment_amount=data["payment_amount"],
    )
    return ok(_result_schema.dump(result))


@tickets_bp.get("/<int:ticket_id>/payments")
@login_required
def list_payments(ticket_id: int):
    payments = _service.list_payments(get_session(), ticket_id)
    return ok(_payments_schema.dump(payments))
