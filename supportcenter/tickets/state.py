from __future__ import annotations

from enum import Enum


class TicketState(str, Enum):
    """Supported states for a ticket's lifecycle."""

    OPEN = "open"
    ANSWERED = "answered"
    CLIENT_ANSWER = "client_answer"
    CLOSED = "closed"


class TicketStateMachine:
    """Derive ticket states from lifecycle events.

    There is no transition table: a response always moves the ticket to the
    state matching its author, whatever the current state is, and closing is
    allowed from every state. A closed ticket is reopened by the next response.
    """

    @classmethod
    def initial_state(cls) -> TicketState:
        return TicketState.OPEN

    @classmethod
    def after_response(cls, *, is_client_response: bool) -> TicketState:
        if is_client_response:
            return TicketState.CLIENT_ANSWER
        return TicketState.ANSWERED

    @classmethod
    def closed_state(cls) -> TicketState:
        return TicketState.CLOSED
