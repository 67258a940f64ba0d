"""ORM models."""

from raffle_admin.models.payment import Payment
from raffle_admin.models.raffle import Raffle
from raffle_admin.models.ticket import Ticket
from raffle_admin.models.user import User

__all__ = ["Payment", "Raffle", "Ticket", "User"]
