from __future__ import annotations


class TicketError(RuntimeError):
    """Base error for ticket lifecycle issues."""


class TicketValidationError(TicketError):
    """Raised when a ticket or response field fails validation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field} {message}")
        self.field = field


class TicketNotFoundError(TicketError):
    """Raised when an operation targets a non-existent ticket."""

    def __init__(self, number: int) -> None:
        super().__init__(f"Ticket {number} not found")
        self.number = number


class NullArgumentError(TicketError):
    """Raised when ``None`` is passed where an entity is required."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"{argument} must not be None")
        self.argument = argument


class InvalidTicketNumberError(TicketError):
    """Raised for ticket numbers that can never exist."""

    def __init__(self, number: int) -> None:
        super().__init__(f"Ticket number must not be negative, got {number}")
        self.number = number
