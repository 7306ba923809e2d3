"""SQLModel table definitions for the support center data layer."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    """Return a timezone aware UTC timestamp."""

    return datetime.now(timezone.utc)


class TicketTable(SQLModel, table=True):
    """Support tickets, standard and hardware alike."""

    __tablename__ = "tickets"
    __table_args__ = {"sqlite_autoincrement": True}

    number: int | None = Field(default=None, primary_key=True)
    account_id: int = Field(sa_column=Column(Integer, nullable=False))
    text: str = Field(sa_column=Column(String(100), nullable=False))
    date_opened: datetime = Field(default_factory=_utcnow, sa_column=Column(DateTime(timezone=True), nullable=False))
    state: str = Field(sa_column=Column(String(50), nullable=False, index=True))
    device_name: str | None = Field(default=None, sa_column=Column(String(255), nullable=True))


class TicketResponseTable(SQLModel, table=True):
    """Responses belonging to a ticket, in insertion order of ``id``."""

    __tablename__ = "ticket_responses"

    id: int | None = Field(default=None, primary_key=True)
    ticket_number: int = Field(
        sa_column=Column(Integer, ForeignKey("tickets.number", ondelete="CASCADE"), nullable=False, index=True)
    )
    text: str = Field(sa_column=Column(String(100), nullable=False))
    date: datetime = Field(default_factory=_utcnow, sa_column=Column(DateTime(timezone=True), nullable=False))
    is_client_response: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
