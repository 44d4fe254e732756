"""Event CRUD endpoints under /api/events."""

import logging

from fastapi import APIRouter, Body, Depends, Response
from pydantic import ValidationError

from api.dependencies import get_event_store, require_verified_user
from api.models.events import CreateEventRequest, EventPayload
from api.models.responses import (
    ErrorCodes,
    error_response,
    success_response,
    validation_message,
)
from core.validation import parse_date_key
from services.events import EventStore
from services.identity import Identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])


@router.options("", include_in_schema=False)
@router.options("/{path:path}", include_in_schema=False)
async def preflight(path: str = "") -> Response:
    """CORS preflight: empty 200, no authentication."""
    return Response(status_code=200)


@router.get("")
@router.get("/", include_in_schema=False)
async def list_events(
    _identity: Identity = Depends(require_verified_user),
    store: EventStore = Depends(get_event_store),
):
    """Return every stored event grouped by date key."""
    try:
        events = await store.read_events()
    except Exception:
        logger.exception("Failed to load events")
        return error_response(500, "Failed to load events", ErrorCodes.INTERNAL_ERROR)
    return success_response(events)


@router.post("")
@router.post("/", include_in_schema=False)
async def create_event(
    request: CreateEventRequest,
    _identity: Identity = Depends(require_verified_user),
    store: EventStore = Depends(get_event_store),
):
    """Create an event under `dateKey`; the store assigns the id."""
    if not request.date_key or request.event is None:
        return error_response(
            400, "Missing required fields: dateKey and event", ErrorCodes.INVALID_REQUEST
        )
    try:
        parse_date_key(request.date_key)
    except ValueError as e:
        return error_response(400, str(e), ErrorCodes.INVALID_REQUEST)

    try:
        created = await store.add_event(request.date_key, request.event.to_record())
    except Exception:
        logger.exception("Failed to create event on %s", request.date_key)
        return error_response(500, "Failed to create event", ErrorCodes.INTERNAL_ERROR)
    return success_response(created)


@router.put("/{date_key}/{event_id}")
async def update_event(
    date_key: str,
    event_id: str,
    body: dict = Body(...),
    _identity: Identity = Depends(require_verified_user),
    store: EventStore = Depends(get_event_store),
):
    """Replace every field of an event except its id."""
    try:
        payload = EventPayload.model_validate(body)
    except ValidationError as e:
        return error_response(400, validation_message(e.errors()), ErrorCodes.INVALID_REQUEST)

    try:
        updated = await store.update_event(date_key, event_id, payload.to_record())
    except Exception:
        logger.exception("Failed to update event %s on %s", event_id, date_key)
        return error_response(500, "Failed to update event", ErrorCodes.INTERNAL_ERROR)

    if updated is None:
        return error_response(404, "Event not found", ErrorCodes.NOT_FOUND)
    return success_response(updated)


@router.delete("/{date_key}/{event_id}")
async def delete_event(
    date_key: str,
    event_id: str,
    _identity: Identity = Depends(require_verified_user),
    store: EventStore = Depends(get_event_store),
):
    """Delete an event; the date key disappears with its last event."""
    try:
        deleted = await store.delete_event(date_key, event_id)
    except Exception:
        logger.exception("Failed to delete event %s on %s", event_id, date_key)
        return error_response(500, "Failed to delete event", ErrorCodes.INTERNAL_ERROR)

    if not deleted:
        return error_response(404, "Event not found", ErrorCodes.NOT_FOUND)
    return success_response()
