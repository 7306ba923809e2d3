from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from opentelemetry import trace

from .errors import InvalidTicketNumberError, NullArgumentError, TicketNotFoundError
from .models import Ticket, TicketResponse
from .state import TicketStateMachine
from .store import TicketStore
from .validation import validate_text

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TicketManager:
    """High level orchestration for ticket lifecycle operations.

    Every rule on ticket and response content is enforced here before the
    store is touched. Store failures are propagated unchanged; nothing is
    retried or rolled back.
    """

    def __init__(
        self,
        store: TicketStore,
        *,
        clock: Callable[[], datetime] | None = None,
        tracer: trace.Tracer | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or _utcnow
        self._tracer = tracer or trace.get_tracer(__name__)

    @property
    def store(self) -> TicketStore:
        return self._store

    async def get_tickets(self) -> list[Ticket]:
        return list(await self._store.read_tickets())

    async def get_ticket(self, number: int) -> Ticket:
        if number < 0:
            raise InvalidTicketNumberError(number)
        ticket = await self._store.read_ticket(number)
        if ticket is None:
            raise TicketNotFoundError(number)
        return ticket
    async def add_ticket(self, account_id: int, text: str | None, *, device_name: str | None = None) -> Ticket:
        with self._tracer.start_as_current_span("tickets.add_ticket") as span:
            span.set_attribute("ticket.account_id", account_id)
            ticket = Ticket(
                account_id=account_id,
                text=validate_text(text),
                date_opened=self._clock(),
                state=TicketStateMachine.initial_state(),
                device_name=device_name,
            )
            created = await self._store.create_ticket(ticket)
            span.set_attribute("ticket.number", created.number)
        logger.info("Created ticket %s for account %s", created.number, account_id)
        return created

    async def change_ticket(self, ticket: Ticket | None) -> None:
        if ticket is None:
            raise NullArgumentError("ticket")
        with self._tracer.start_as_current_span("tickets.change_ticket") as span:
            span.set_attribute("ticket.number", ticket.number)
            validate_text(ticket.text)
            await self._store.update_ticket(ticket)
        logger.info("Updated ticket %s", ticket.number)

    async def remove_ticket(self, number: int) -> None:
        with self._tracer.start_as_current_span("tickets.remove_ticket") as span:
            span.set_attribute("ticket.number", number)
            await self._store.delete_ticket(number)
        logger.info("Removed ticket %s", number)

    async def get_ticket_responses(self, number: int) -> list[TicketResponse]:
        return list(await self._store.read_ticket_responses_of_ticket(number))

    async def add_ticket_response(self, ticket_number: int, text: str | None, is_client_response: bool) -> TicketResponse:
        with self._tracer.start_as_current_span("tickets.add_ticket_response") as span:
            span.set_attribute("ticket.number", ticket_number)
            span.set_attribute("ticket.response.is_client", is_client_response)
            validated = validate_text(text, field="response text")
            ticket = await self._store.read_ticket(ticket_number)
            if ticket is None:
                raise TicketNotFoundError(ticket_number)

            response = TicketResponse(
                ticket_number=ticket_number,
                text=validated,
                date=self._clock(),
                is_client_response=is_client_response,
            )
            created = await self._store.create_ticket_response(response)

            # The response stays recorded even if the state update below fails.
            previous = ticket.state
            ticket.state = TicketStateMachine.after_response(is_client_response=is_client_response)
            await self._store.update_ticket(ticket)
            span.set_attribute("ticket.state", ticket.state.value)
        logger.info(
            "Added %s response to ticket %s (%s -> %s)",
            "client" if is_client_response else "support",
            ticket_number,
            previous.value,
            ticket.state.value,
        )
        return created

    async def close_ticket(self, number: int) -> None:
        with self._tracer.start_as_current_span("tickets.close_ticket") as span:
            span.set_attribute("ticket.number", number)
            await self._store.update_ticket_state_to_closed(number)
        logger.info("Closed ticket %s", number)
