from __future__ import annotations

from typing import Protocol, Sequence

from .models import Ticket, TicketResponse


class TicketStore(Protocol):
    """Persistence port consumed by :class:`~supportcenter.tickets.service.TicketManager`.

    Lookups by number raise :class:`TicketNotFoundError` when the ticket is
    absent, except :meth:`read_ticket_responses_of_ticket`, which returns an
    empty sequence. Passing ``None`` where a record is expected raises
    :class:`NullArgumentError`. Returned records are detached copies.
    """

    async def create_ticket(self, ticket: Ticket) -> Ticket:
        ...

    async def read_ticket(self, number: int) -> Ticket:
        ...

    async def read_tickets(self) -> Sequence[Ticket]:
        ...

    async def update_ticket(self, ticket: Ticket) -> None:
        ...

    async def delete_ticket(self, number: int) -> None:
        ...

    async def create_ticket_response(self, response: TicketResponse) -> TicketResponse:
        ...

    async def read_ticket_responses_of_ticket(self, number: int) -> Sequence[TicketResponse]:
        ...

    async def update_ticket_state_to_closed(self, number: int) -> None:
        ...

    async def clear(self) -> None:
        ...
