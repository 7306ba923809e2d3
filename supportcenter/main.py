from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from supportcenter.api.routes import ping, tickets
from supportcenter.core.config import Settings, get_settings
from supportcenter.core.logging import configure_logging, init_tracer, shutdown_tracer
from supportcenter.tickets.memory import InMemoryTicketStore
from supportcenter.tickets.repository import SqlTicketStore
from supportcenter.tickets.seed import seed_demo_tickets
from supportcenter.tickets.service import TicketManager
from supportcenter.tickets.store import TicketStore


def _to_asyncpg_dsn(dsn: str) -> str:
    """Ensure a plain PostgreSQL DSN uses the asyncpg driver."""

    if dsn.startswith("postgresql+asyncpg://"):
        return dsn
    if dsn.startswith("postgresql://"):
        return "postgresql+asyncpg://" + dsn[len("postgresql://") :]
    return dsn


async def build_ticket_store(settings: Settings) -> tuple[TicketStore, AsyncEngine | None]:
    """Create the configured store; the engine is returned so it can be disposed."""

    if not settings.database_url:
        return InMemoryTicketStore(), None

    engine = create_async_engine(_to_asyncpg_dsn(settings.database_url), future=True)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    store = SqlTicketStore(session_factory, engine=engine)
    try:
        await store.ensure_schema()
    except Exception:
        await engine.dispose()
        raise
    return store, engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger = configure_logging(settings)
    tracer_provider = init_tracer(settings)

    store, engine = await build_ticket_store(settings)
    manager = TicketManager(store)
    if settings.seed_demo_data:
        await seed_demo_tickets(manager)

    app.state.logger = logger
    app.state.tracer_provider = tracer_provider
    app.state.ticket_manager = manager
    logger.info("Ticket store ready: %s", type(store).__name__)
    try:
        yield
    finally:
        if engine is not None:
            await engine.dispose()
        shutdown_tracer(tracer_provider)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.include_router(ping.router)
    app.include_router(tickets.router)
    return app


app = create_app()
