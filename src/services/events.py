"""
Event store: date-keyed CRUD over a whole-document storage backend.

Every write is a read-modify-write cycle. Nothing serializes concurrent
writers, so two requests writing the same store race and the last write wins.
Not-found is reported with None/False, never with an exception.
"""

import asyncio
import logging
import secrets
import time
from typing import Any

from core.database import StorageBackend
from models.events import Event, EventsData

logger = logging.getLogger(__name__)


def generate_event_id(existing_ids: set[str] | None = None) -> str:
    """
    Build an id from a millisecond timestamp and a random suffix.

    Retries while the candidate collides with an id in `existing_ids`.
    """
    existing_ids = existing_ids or set()
    while True:
        candidate = f"{time.time_ns() // 1_000_000}-{secrets.token_hex(4)}"
        if candidate not in existing_ids:
            return candidate


def _find_index(events: list[Event], event_id: str) -> int:
    """Position of the event whose id matches `event_id` as a string, or -1."""
    target = str(event_id)
    for index, event in enumerate(events):
        if str(event.get("id")) == target:
            return index
    return -1


class EventStore:
    """Async facade over a StorageBackend.

    Example usage:
        store = EventStore(JsonFileBackend(Path("data/events.json")))
        event = await store.add_event("2024-6-1", {"title": "Lunch", "pax": 4})
    """

    def __init__(self, backend: StorageBackend):
        self.backend = backend

    async def read_events(self) -> EventsData:
        """Return the full mapping; an empty store is {}."""
        data = await asyncio.to_thread(self.backend.read)
        return data or {}

    async def _write_events(self, events: EventsData) -> None:
        await asyncio.to_thread(self.backend.write, events)

    async def add_event(self, date_key: str, event: dict[str, Any]) -> Event:
        """Append `event` under `date_key` with a freshly generated id."""
        events = await self.read_events()
        day_events = events.setdefault(date_key, [])

        fields = {k: v for k, v in event.items() if k != "id"}
        new_event: Event = {
            **fields,
            "id": generate_event_id({str(e.get("id")) for e in day_events}),
        }
        day_events.append(new_event)

        await self._write_events(events)
        logger.info("Added event %s on %s", new_event["id"], date_key)
        return new_event

    async def update_event(
        self, date_key: str, event_id: str, patch: dict[str, Any]
    ) -> Event | None:
        """Replace every field except id. Returns None if the event is absent."""
        events = await self.read_events()
        day_events = events.get(date_key)
        if not day_events:
            return None

        index = _find_index(day_events, event_id)
        if index == -1:
            return None

        fields = {k: v for k, v in patch.items() if k != "id"}
        updated: Event = {**fields, "id": str(day_events[index].get("id"))}
        day_events[index] = updated

        await self._write_events(events)
        logger.info("Updated event %s on %s", updated["id"], date_key)
        return updated

    async def delete_event(self, date_key: str, event_id: str) -> bool:
        """Remove an event, pruning the date key when it empties."""
        events = await self.read_events()
        day_events = events.get(date_key)
        if not day_events:
            return False

        index = _find_index(day_events, event_id)
        if index == -1:
            return False

        day_events.pop(index)
        if not day_events:
            del events[date_key]

        await self._write_events(events)
        logger.info("Deleted event %s on %s", event_id, date_key)
        return True

    async def ping(self) -> None:
        """Lightweight reachability check. Raises on error."""
        await self.read_events()
