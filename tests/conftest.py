from __future__ import annotations

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from supportcenter.tickets.memory import InMemoryTicketStore
from supportcenter.tickets.repository import SqlTicketStore
from supportcenter.tickets.service import TicketManager

FIXED_NOW = datetime(2024, 2, 14, 9, 30, 15, 250000, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def memory_store() -> InMemoryTicketStore:
    return InMemoryTicketStore()


@pytest.fixture
def manager(memory_store: InMemoryTicketStore) -> TicketManager:
    return TicketManager(memory_store, clock=lambda: FIXED_NOW)


@pytest_asyncio.fixture
async def sql_store():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    store = SqlTicketStore(async_sessionmaker(engine, expire_on_commit=False), engine=engine)
    await store.ensure_schema()
    try:
        yield store
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request):
    """Every store adapter, so the storage contract is checked once for both."""

    if request.param == "memory":
        yield InMemoryTicketStore()
        return

    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    sql_store = SqlTicketStore(async_sessionmaker(engine, expire_on_commit=False), engine=engine)
    await sql_store.ensure_schema()
    try:
        yield sql_store
    finally:
        await engine.dispose()
