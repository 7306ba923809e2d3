from __future__ import annotations

import logging

from .errors import TicketValidationError

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 100


def validate_text(text: str | None, *, field: str = "text") -> str:
    """Return ``text`` unchanged if it is a usable ticket or response body.

    Whitespace-only text counts as empty. The length limit applies to the raw
    value, surrounding whitespace included.
    """

    if text is None or not text.strip():
        logger.warning("Rejected %s: value is required", field)
        raise TicketValidationError(field, "is required")
    if len(text) > MAX_TEXT_LENGTH:
        logger.warning("Rejected %s: %d characters exceeds %d", field, len(text), MAX_TEXT_LENGTH)
        raise TicketValidationError(field, f"must be at most {MAX_TEXT_LENGTH} characters")
    return text
