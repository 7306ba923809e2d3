from __future__ import annotations

import logging

from .service import TicketManager

logger = logging.getLogger(__name__)


async def seed_demo_tickets(manager: TicketManager) -> None:
    """Replace the store contents with a small set of demonstration tickets."""

    await manager.store.clear()

    login = await manager.add_ticket(1, "I cannot sign in to webmail")
    await manager.add_ticket_response(login.number, "Your account was locked", False)
    await manager.add_ticket_response(login.number, "Account unlocked and a new password was set", False)
    await manager.add_ticket_response(login.number, "Signed in and changed my password", True)
    await manager.close_ticket(login.number)

    await manager.add_ticket(1, "No internet connection")

    hardware = await manager.add_ticket(2, "Blue screen on startup", device_name="PC-123456")
    await manager.add_ticket_response(hardware.number, "Have you restarted the machine?", False)

    logger.info("Seeded demonstration tickets")
