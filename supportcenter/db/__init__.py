"""Database models and utilities."""

from .models import TicketResponseTable, TicketTable

__all__ = [
    "TicketResponseTable",
    "TicketTable",
]
