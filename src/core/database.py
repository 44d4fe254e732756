"""
Storage backends for the events document.

Each backend reads and writes the whole EventsData mapping at once. The event
store layers its read-modify-write operations on top of these two calls.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from core.config import (
    EVENTS_BACKEND,
    EVENTS_FILE_PATH,
    SUPABASE_EVENTS_KEY,
    SUPABASE_EVENTS_TABLE,
)

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when the backing store cannot be read or written."""


class StorageBackend(Protocol):
    """Whole-document persistence for EventsData."""

    def read(self) -> dict[str, Any]: ...

    def write(self, data: dict[str, Any]) -> None: ...


class JsonFileBackend:
    """EventsData kept as an indented JSON file on local disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> dict[str, Any]:
        """Load the document. A missing file is an empty store."""
        if not self.path.exists():
            return {}
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Malformed events file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Events file {self.path} does not hold an object")
        return data

    def write(self, data: dict[str, Any]) -> None:
        """Replace the document, creating parent directories as needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write events file %s: %s", self.path, e)
            raise StorageError(f"Failed to write {self.path}: {e}") from e


class SupabaseBackend:
    """
    EventsData kept as one JSON row in a Supabase table.

    Expected table shape:
        key  text primary key
        data jsonb not null
    """

    def __init__(self, client, table: str, document_key: str):
        self.client = client
        self.table = table
        self.document_key = document_key

    def read(self) -> dict[str, Any]:
        try:
            response = (
                self.client.table(self.table)
                .select("data")
                .eq("key", self.document_key)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise StorageError(f"Supabase read failed ({self.table}): {e}") from e

        rows = response.data or []
        if not rows:
            return {}
        return rows[0].get("data") or {}

    def write(self, data: dict[str, Any]) -> None:
        try:
            (
                self.client.table(self.table)
                .upsert({"key": self.document_key, "data": data}, on_conflict="key")
                .execute()
            )
        except Exception as e:
            raise StorageError(f"Supabase write failed ({self.table}): {e}") from e


def get_backend(kind: str | None = None) -> StorageBackend:
    """Build the backend named by EVENTS_BACKEND ('file' or 'supabase')."""
    kind = (kind or EVENTS_BACKEND).lower()
    if kind == "file":
        return JsonFileBackend(EVENTS_FILE_PATH)
    if kind == "supabase":
        from core.supabase_client import get_supabase_client

        return SupabaseBackend(
            get_supabase_client(), SUPABASE_EVENTS_TABLE, SUPABASE_EVENTS_KEY
        )
    raise ValueError(f"Unknown events backend: {kind!r}")
