from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel, select

from supportcenter.db.models import TicketResponseTable, TicketTable

from .errors import NullArgumentError, TicketNotFoundError
from .models import Ticket, TicketResponse
from .state import TicketState, TicketStateMachine


class SqlTicketStore:
    """Persistence helper wrapping the `tickets` and `ticket_responses` tables."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        engine: AsyncEngine | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._engine: AsyncEngine | None = engine

    async def ensure_schema(self) -> None:
        if self._engine is None:
            raise RuntimeError("Session factory is not bound to an async engine")
        async with self._engine.begin() as connection:
            await connection.run_sync(SQLModel.metadata.create_all)

    async def create_ticket(self, ticket: Ticket) -> Ticket:
        if ticket is None:
            raise NullArgumentError("ticket")
        row = TicketTable(
            account_id=ticket.account_id,
            text=ticket.text,
            date_opened=ticket.date_opened,
            state=ticket.state.value,
            device_name=ticket.device_name,
        )
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)
        return self._table_to_ticket(row, [])

    async def read_ticket(self, number: int) -> Ticket:
        async with self._session_factory() as session:
            row = await session.get(TicketTable, number)
            if row is None:
                raise TicketNotFoundError(number)
            result = await session.execute(
                select(TicketResponseTable)
                .where(TicketResponseTable.ticket_number == number)
                .order_by(TicketResponseTable.id.asc())
            )
            responses = [self._table_to_response(item) for item in result.scalars().all()]
        return self._table_to_ticket(row, responses)

    async def read_tickets(self) -> list[Ticket]:
        async with self._session_factory() as session:
            ticket_result = await session.execute(select(TicketTable).order_by(TicketTable.number.asc()))
            response_result = await session.execute(
                select(TicketResponseTable).order_by(TicketResponseTable.id.asc())
            )
            ticket_rows = ticket_result.scalars().all()
            response_rows = response_result.scalars().all()

        grouped: dict[int, list[TicketResponse]] = defaultdict(list)
        for item in response_rows:
            grouped[item.ticket_number].append(self._table_to_response(item))
        return [self._table_to_ticket(row, grouped.get(row.number, [])) for row in ticket_rows]

    async def update_ticket(self, ticket: Ticket) -> None:
        if ticket is None:
            raise NullArgumentError("ticket")
        if ticket.number is None:
            raise TicketNotFoundError(-1)
        async with self._session_factory() as session:
            row = await session.get(TicketTable, ticket.number)
            if row is None:
                raise TicketNotFoundError(ticket.number)
            row.account_id = ticket.account_id
            row.text = ticket.text
            row.date_opened = ticket.date_opened
            row.state = ticket.state.value
            row.device_name = ticket.device_name
            await session.commit()

    async def delete_ticket(self, number: int) -> None:
        async with self._session_factory() as session:
            row = await session.get(TicketTable, number)
            if row is None:
                raise TicketNotFoundError(number)
            await session.execute(delete(TicketResponseTable).where(TicketResponseTable.ticket_number == number))
            await session.delete(row)
            await session.commit()

    async def create_ticket_response(self, response: TicketResponse) -> TicketResponse:
        if response is None:
            raise NullArgumentError("response")
        row = TicketResponseTable(
            ticket_number=response.ticket_number,
            text=response.text,
            date=response.date,
            is_client_response=response.is_client_response,
        )
        async with self._session_factory() as session:
            if await session.get(TicketTable, response.ticket_number) is None:
                raise TicketNotFoundError(response.ticket_number)
            session.add(row)
            await session.commit()
            await session.refresh(row)
        return self._table_to_response(row)

    async def read_ticket_responses_of_ticket(self, number: int) -> list[TicketResponse]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(TicketResponseTable)
                .where(TicketResponseTable.ticket_number == number)
                .order_by(TicketResponseTable.id.asc())
            )
            return [self._table_to_response(item) for item in result.scalars().all()]

    async def update_ticket_state_to_closed(self, number: int) -> None:
        async with self._session_factory() as session:
            row = await session.get(TicketTable, number)
            if row is None:
                raise TicketNotFoundError(number)
            row.state = TicketStateMachine.closed_state().value
            await session.commit()

    async def clear(self) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await session.execute(delete(TicketResponseTable))
                await session.execute(delete(TicketTable))

    @staticmethod
    def _table_to_ticket(row: TicketTable, responses: list[TicketResponse]) -> Ticket:
        return Ticket(
            number=row.number,
            account_id=row.account_id,
            text=row.text,
            date_opened=_ensure_datetime(row.date_opened),
            state=TicketState(row.state),
            device_name=row.device_name,
            responses=responses,
        )

    @staticmethod
    def _table_to_response(row: TicketResponseTable) -> TicketResponse:
        return TicketResponse(
            id=row.id,
            ticket_number=row.ticket_number,
            text=row.text,
            date=_ensure_datetime(row.date),
            is_client_response=bool(row.is_client_response),
        )


def _ensure_datetime(value: datetime | None) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    raise TypeError("Expected datetime value from database")
