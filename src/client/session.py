"""Lifecycle of one logged-in calendar client."""

from typing import Callable

import httpx

from client.api import CredentialStore, EventsApiClient
from client.cache import EventsCache
from client.sync import SyncController
from core.config import CALENDAR_API_TIMEOUT, CALENDAR_API_URL


class CalendarSession:
    """
    Credentials, HTTP client, mirror and sync controller for one login.

    Created at sign-in, loaded with `start()`, torn down with `close()`.
    Usable as an async context manager.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str = CALENDAR_API_URL,
        timeout: float = CALENDAR_API_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        on_change: Callable[[EventsCache], None] | None = None,
        on_error: Callable[[str], None] | None = None,
        on_unauthorized: Callable[[], None] | None = None,
    ):
        self.credentials = CredentialStore(token)
        self.http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
        self.api = EventsApiClient(self.http, self.credentials, on_unauthorized)
        self.cache = EventsCache()
        self.sync = SyncController(self.api, self.cache, on_change, on_error)

    async def start(self) -> bool:
        """Initial full load; returns whether the server answered."""
        return await self.sync.load_events()

    async def close(self) -> None:
        """Logout: drop the mirror and the credential, close the connection pool."""
        self.cache.clear()
        self.credentials.clear()
        await self.http.aclose()

    async def __aenter__(self) -> "CalendarSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
