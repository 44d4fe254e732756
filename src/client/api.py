"""
HTTP client for the /api/events endpoints.

Unwraps the `{success, data, error}` envelope. A 401 anywhere clears the stored
credential and fires the unauthorized hook before raising.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import quote

import httpx

from models.events import Event, EventsData

logger = logging.getLogger(__name__)


class ApiCallError(Exception):
    """Raised when the API answers with `success: false` or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UnauthorizedError(ApiCallError):
    """Raised on a 401; the credential has already been discarded."""


@dataclass
class CredentialStore:
    """Holds the bearer token for the current login."""

    token: str | None = None

    def set(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None


class EventsApiClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        credentials: CredentialStore,
        on_unauthorized: Callable[[], None] | None = None,
    ):
        self.http = http
        self.credentials = credentials
        self.on_unauthorized = on_unauthorized

    async def _call(self, method: str, path: str, json: Any = None) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.credentials.token:
            headers["Authorization"] = f"Bearer {self.credentials.token}"

        try:
            response = await self.http.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error("API Error: %s %s failed: %s", method, path, e)
            raise ApiCallError(f"Network error: {e}") from e

        if response.status_code == 401:
            logger.warning("API Error: %s %s unauthorized", method, path)
            self.credentials.clear()
            if self.on_unauthorized:
                self.on_unauthorized()
            raise UnauthorizedError("Unauthorized", status_code=401)

        try:
            body = response.json()
        except ValueError as e:
            raise ApiCallError(
                f"Malformed response ({response.status_code})", response.status_code
            ) from e

        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            raise ApiCallError(error or "API call failed", response.status_code)
        return body

    @staticmethod
    def _event_path(date_key: str, event_id: str) -> str:
        return f"/api/events/{quote(date_key, safe='')}/{quote(str(event_id), safe='')}"

    async def list_events(self) -> EventsData:
        body = await self._call("GET", "/api/events")
        return body.get("data") or {}

    async def create_event(self, date_key: str, event: dict[str, Any]) -> Event:
        body = await self._call("POST", "/api/events", json={"dateKey": date_key, "event": event})
        return body["data"]

    async def update_event(self, date_key: str, event_id: str, event: dict[str, Any]) -> Event:
        body = await self._call("PUT", self._event_path(date_key, event_id), json=event)
        return body["data"]

    async def delete_event(self, date_key: str, event_id: str) -> None:
        await self._call("DELETE", self._event_path(date_key, event_id))
