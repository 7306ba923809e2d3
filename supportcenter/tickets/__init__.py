"""Ticket domain models, storage adapters and lifecycle manager."""

from .errors import (
    InvalidTicketNumberError,
    NullArgumentError,
    TicketError,
    TicketNotFoundError,
    TicketValidationError,
)
from .memory import InMemoryTicketStore
from .models import Ticket, TicketResponse
from .repository import SqlTicketStore
from .service import TicketManager
from .state import TicketState, TicketStateMachine
from .store import TicketStore

__all__ = [
    "InMemoryTicketStore",
    "InvalidTicketNumberError",
    "NullArgumentError",
    "SqlTicketStore",
    "Ticket",
    "TicketError",
    "TicketManager",
    "TicketNotFoundError",
    "TicketResponse",
    "TicketState",
    "TicketStateMachine",
    "TicketStore",
    "TicketValidationError",
]
