"""
Optimistic synchronization between the local mirror and the events API.

Every mutation follows the same shape: apply to the cache and notify, call the
API, then either reconcile with the server copy or roll back. Create and update
roll back by reloading everything from the server, or by emptying the mirror
when the credential was rejected; delete restores the removed entry at its old
position. Failed mutations re-raise after rolling back.
"""

import itertools
import logging
import time
from copy import deepcopy
from typing import Any, Callable

from client.api import ApiCallError, EventsApiClient, UnauthorizedError
from client.cache import EventsCache
from client.mutations import Mutation, MutationKind
from models.events import Event

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp_"


def is_confirmed_id(event_id: Any) -> bool:
    """True for ids the server assigned (not missing, not provisional)."""
    return bool(event_id) and not str(event_id).startswith(TEMP_ID_PREFIX)


def _without_id(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k != "id"}


class SyncController:
    """Owns the write path into an EventsCache.

    Example usage:
        sync = SyncController(api, EventsCache(), on_change=render)
        await sync.load_events()
        await sync.create_event("2024-6-1", {"title": "Lunch", "pax": 4})
    """

    def __init__(
        self,
        api: EventsApiClient,
        cache: EventsCache,
        on_change: Callable[[EventsCache], None] | None = None,
        on_error: Callable[[str], None] | None = None,
    ):
        self.api = api
        self.cache = cache
        self.on_change = on_change
        self.on_error = on_error
        self.last_mutation: Mutation | None = None
        self._temp_seq = itertools.count(1)

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self.cache)

    def _alert(self, message: str, error: Exception) -> None:
        # A 401 already sent the user back to login
        if self.on_error and not isinstance(error, UnauthorizedError):
            self.on_error(message)

    def _temp_id(self) -> str:
        return f"{TEMP_ID_PREFIX}{time.time_ns() // 1_000_000}_{next(self._temp_seq)}"

    async def load_events(self) -> bool:
        """
        Replace the mirror with the server's data.

        On failure the mirror is emptied rather than left stale. Returns
        whether the reload succeeded; API failures are not raised.
        """
        try:
            data = await self.api.list_events()
        except ApiCallError as e:
            logger.error("Failed to load events: %s", e)
            self.cache.clear()
            self._notify()
            return False

        self.cache.replace(data)
        self._notify()
        return True

    async def _resync(self, error: ApiCallError) -> None:
        """Discard an optimistic guess after a failed create or update."""
        if isinstance(error, UnauthorizedError):
            # Credentials are gone; a reload would only hit another 401
            self.cache.clear()
            self._notify()
            return
        await self.load_events()

    async def create_event(self, date_key: str, data: dict[str, Any]) -> Event:
        """Show a provisional entry at once, then swap in the stored event."""
        temp_id = self._temp_id()
        self.cache.append(date_key, {**_without_id(data), "id": temp_id})
        mutation = Mutation(MutationKind.CREATE, date_key, temp_id)
        self.last_mutation = mutation
        self._notify()

        try:
            created = await self.api.create_event(date_key, _without_id(data))
        except ApiCallError as e:
            logger.error("Failed to create event on %s: %s", date_key, e)
            mutation.roll_back(e)
            await self._resync(e)
            self._alert(f"Failed to save event: {e.message}", e)
            raise

        index = self.cache.find_index(date_key, temp_id)
        if index != -1:
            self.cache.set_at(date_key, index, created)
            self._notify()
        mutation.confirm(created)
        return created

    async def update_event(
        self, date_key: str, event_id: str, data: dict[str, Any]
    ) -> Event | None:
        """
        Overwrite the local entry, then store the server's copy in its place.

        An entry without a server id is not edited locally: the mirror is
        reloaded instead and None is returned.
        """
        if not is_confirmed_id(event_id):
            logger.info("Update for unconfirmed id %r on %s; reloading", event_id, date_key)
            await self.load_events()
            return None

        event_id = str(event_id)
        index = self.cache.find_index(date_key, event_id)
        mutation = Mutation(MutationKind.UPDATE, date_key, event_id, position=index)
        if index != -1:
            mutation.previous = deepcopy(self.cache.data[date_key][index])
            self.cache.set_at(date_key, index, {**_without_id(data), "id": event_id})
            self._notify()
        self.last_mutation = mutation

        try:
            updated = await self.api.update_event(date_key, event_id, _without_id(data))
        except ApiCallError as e:
            logger.error("Failed to update event %s on %s: %s", event_id, date_key, e)
            mutation.roll_back(e)
            await self._resync(e)
            self._alert(f"Failed to save event: {e.message}", e)
            raise

        index = self.cache.find_index(date_key, event_id)
        if index != -1:
            self.cache.set_at(date_key, index, updated)
            self._notify()
        mutation.confirm(updated)
        return updated

    async def delete_event(self, date_key: str, event_id: str) -> bool:
        """
        Remove the local entry, restoring it at the same position on failure.

        An entry without a server id is not spliced locally: the mirror is
        reloaded instead and False is returned.
        """
        if not is_confirmed_id(event_id):
            logger.info("Delete for unconfirmed id %r on %s; reloading", event_id, date_key)
            await self.load_events()
            return False

        event_id = str(event_id)
        index = self.cache.find_index(date_key, event_id)
        mutation = Mutation(MutationKind.DELETE, date_key, event_id, position=index)
        if index != -1:
            mutation.previous = self.cache.remove_at(date_key, index)
            self._notify()
        self.last_mutation = mutation

        try:
            await self.api.delete_event(date_key, event_id)
        except ApiCallError as e:
            logger.error("Failed to delete event %s on %s: %s", event_id, date_key, e)
            if mutation.previous is not None:
                self.cache.insert_at(date_key, index, mutation.previous)
                self._notify()
            mutation.roll_back(e)
            self._alert("Failed to delete event. Please try again.", e)
            raise

        mutation.confirm()
        return True
