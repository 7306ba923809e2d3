from __future__ import annotations

import copy
from dataclasses import replace

from .errors import NullArgumentError, TicketNotFoundError
from .models import Ticket, TicketResponse
from .state import TicketStateMachine


class InMemoryTicketStore:
    """Process-local ticket store.

    Numbers start at 1 and are never reused after a deletion. Tickets are kept
    in creation order and every read hands out a deep copy.
    """

    def __init__(self) -> None:
        self._tickets: dict[int, Ticket] = {}
        self._next_number = 1
        self._next_response_id = 1

    async def create_ticket(self, ticket: Ticket) -> Ticket:
        if ticket is None:
            raise NullArgumentError("ticket")
        stored = replace(ticket, number=self._next_number, responses=[])
        self._next_number += 1
        self._tickets[stored.number] = stored
        return copy.deepcopy(stored)

    async def read_ticket(self, number: int) -> Ticket:
        return copy.deepcopy(self._get(number))

    async def read_tickets(self) -> list[Ticket]:
        return [copy.deepcopy(ticket) for ticket in self._tickets.values()]

    async def update_ticket(self, ticket: Ticket) -> None:
        if ticket is None:
            raise NullArgumentError("ticket")
        if ticket.number is None:
            raise TicketNotFoundError(-1)
        current = self._get(ticket.number)
        # Responses are owned by the store; only the ticket's own columns change.
        self._tickets[ticket.number] = replace(ticket, responses=current.responses)

    async def delete_ticket(self, number: int) -> None:
        self._get(number)
        del self._tickets[number]

    async def create_ticket_response(self, response: TicketResponse) -> TicketResponse:
        if response is None:
            raise NullArgumentError("response")
        ticket = self._get(response.ticket_number)
        stored = replace(response, id=self._next_response_id)
        self._next_response_id += 1
        ticket.responses.append(stored)
        return copy.deepcopy(stored)

    async def read_ticket_responses_of_ticket(self, number: int) -> list[TicketResponse]:
        ticket = self._tickets.get(number)
        if ticket is None:
            return []
        return [copy.deepcopy(response) for response in ticket.responses]

    async def update_ticket_state_to_closed(self, number: int) -> None:
        self._get(number).state = TicketStateMachine.closed_state()

    async def clear(self) -> None:
        self._tickets.clear()

    def _get(self, number: int) -> Ticket:
        ticket = self._tickets.get(number)
        if ticket is None:
            raise TicketNotFoundError(number)
        return ticket
