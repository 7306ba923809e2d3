from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .state import TicketState


@dataclass(slots=True)
class TicketResponse:
    """Single reply attached to a ticket, either from support or the client."""

    ticket_number: int
    text: str
    date: datetime
    is_client_response: bool
    id: int | None = None


@dataclass(slots=True)
class Ticket:
    """Aggregate representing a support ticket and its ordered responses.

    Hardware tickets are the same record carrying a ``device_name``.
    """

    account_id: int
    text: str
    date_opened: datetime
    state: TicketState = TicketState.OPEN
    number: int | None = None
    device_name: str | None = None
    responses: list[TicketResponse] = field(default_factory=list)

    @property
    def is_hardware(self) -> bool:
        return self.device_name is not None
