"""Web-specific dependencies for the session-held bill."""

import json
import logging
from base64 import b64encode

from fastapi import HTTPException, Request, status
from pydantic import ValidationError

from app.core.config import settings
from app.schemas.bill import BillState
from app.services.tenants import default_state

logger = logging.getLogger(__name__)

SESSION_KEY = "bill"


def get_bill_state(request: Request) -> BillState:
    """Get the visitor's bill from the session, starting a fresh one if absent."""
    data = request.session.get(SESSION_KEY)
    if data:
        try:
            return BillState.model_validate(data)
        except ValidationError:
            logger.warning("Discarding unreadable bill state from session")
    state = default_state()
    save_bill_state(request, state)
    return state


def session_size(session: dict) -> int:
    """Length of the encoded session payload before signing."""
    return len(b64encode(json.dumps(session).encode("utf-8")))


def save_bill_state(request: Request, state: BillState) -> None:
    """Store the visitor's bill in the session.

    A bill whose encoded session would exceed ``MAX_SESSION_BYTES`` is refused
    with a 400 and the stored one is kept.
    """
    data = state.model_dump(mode="json")
    size = session_size({**request.session, SESSION_KEY: data})
    if size > settings.MAX_SESSION_BYTES:
        logger.warning(
            "Refused to store bill with %d tenants (%d bytes)", len(state.tenants), size
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Too many tenants or names too long to keep in this session.",
        )
    request.session[SESSION_KEY] = data


def get_flash_messages(request: Request) -> list[dict]:
    """Get and clear flash messages from session."""
    messages = request.session.pop("flash_messages", [])
    return messages


def add_flash_message(
    request: Request,
    message: str,
    category: str = "info",
    title: str | None = None,
) -> None:
    """Add a flash message to the session."""
    if "flash_messages" not in request.session:
        request.session["flash_messages"] = []
    request.session["flash_messages"].append(
        {"message": message, "category": category, "title": title}
    )
