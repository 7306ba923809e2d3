from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from supportcenter.tickets.service import TicketManager


async def get_ticket_manager(request: Request) -> TicketManager:
    manager = getattr(request.app.state, "ticket_manager", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="Ticket manager is not configured")
    return manager


TicketManagerDep = Annotated[TicketManager, Depends(get_ticket_manager)]
