"""Tests for the date-keyed event store."""

import json

import pytest

from core.database import JsonFileBackend, StorageError, SupabaseBackend, get_backend
from services.events import generate_event_id


async def test_empty_store_reads_as_empty_mapping(store):
    assert await store.read_events() == {}


async def test_add_event_assigns_fresh_string_id(store):
    created = await store.add_event("2024-6-1", {"title": "Lunch", "pax": 4, "withFood": False})

    assert isinstance(created["id"], str)
    assert {k: v for k, v in created.items() if k != "id"} == {
        "title": "Lunch",
        "pax": 4,
        "withFood": False,
    }
    assert await store.read_events() == {"2024-6-1": [created]}


async def test_add_event_ignores_client_supplied_id(store):
    created = await store.add_event("2024-6-1", {"id": "temp_1", "title": "Tea"})

    assert created["id"] != "temp_1"


async def test_ids_are_unique_within_a_date(store):
    ids = {(await store.add_event("2024-6-1", {"title": f"E{i}"}))["id"] for i in range(20)}

    assert len(ids) == 20
    assert len((await store.read_events())["2024-6-1"]) == 20


def test_generate_event_id_avoids_existing_ids(monkeypatch):
    tokens = iter(["aaaa", "bbbb"])
    monkeypatch.setattr("services.events.secrets.token_hex", lambda n: next(tokens))
    monkeypatch.setattr("services.events.time.time_ns", lambda: 5_000_000)

    assert generate_event_id({"5-aaaa"}) == "5-bbbb"


async def test_update_preserves_id_and_replaces_other_fields(store):
    created = await store.add_event("2024-6-1", {"title": "Lunch", "notes": "old", "pax": 4})

    updated = await store.update_event(
        "2024-6-1", created["id"], {"id": "hijack", "title": "Dinner", "pax": 8}
    )

    assert updated == {"title": "Dinner", "pax": 8, "id": created["id"]}
    assert (await store.read_events())["2024-6-1"] == [updated]


async def test_update_missing_event_returns_none_without_writing(store, backend):
    await store.add_event("2024-6-1", {"title": "Lunch"})
    before = await store.read_events()
    writes = backend.writes

    assert await store.update_event("2024-6-1", "does-not-exist", {"title": "X"}) is None
    assert await store.update_event("2024-6-2", "does-not-exist", {"title": "X"}) is None
    assert backend.writes == writes
    assert await store.read_events() == before


async def test_update_matches_legacy_numeric_ids_as_strings(backend, store):
    backend.write({"2024-6-1": [{"id": 1717200000000.123, "title": "Old"}]})

    updated = await store.update_event("2024-6-1", "1717200000000.123", {"title": "New"})

    assert updated == {"title": "New", "id": "1717200000000.123"}


async def test_delete_keeps_remaining_events_in_order(store):
    first = await store.add_event("2024-6-1", {"title": "First"})
    second = await store.add_event("2024-6-1", {"title": "Second"})
    third = await store.add_event("2024-6-1", {"title": "Third"})

    assert await store.delete_event("2024-6-1", first["id"]) is True
    assert (await store.read_events())["2024-6-1"] == [second, third]


async def test_deleting_last_event_prunes_date_key(store):
    created = await store.add_event("2024-6-1", {"title": "Only"})
    await store.add_event("2024-6-2", {"title": "Other day"})

    assert await store.delete_event("2024-6-1", created["id"]) is True

    events = await store.read_events()
    assert "2024-6-1" not in events
    assert "2024-6-2" in events


async def test_delete_not_found_returns_false_without_writing(store, backend):
    created = await store.add_event("2024-6-1", {"title": "Only"})
    writes = backend.writes

    assert await store.delete_event("2024-6-9", created["id"]) is False
    assert await store.delete_event("2024-6-1", "nope") is False
    assert backend.writes == writes


async def test_reads_are_idempotent(store):
    await store.add_event("2024-6-1", {"title": "Lunch"})

    assert await store.read_events() == await store.read_events()


async def test_add_then_update_round_trip_shows_new_fields(store):
    created = await store.add_event("2024-6-1", {"title": "Lunch", "pax": 4})
    await store.update_event("2024-6-1", created["id"], {"title": "Brunch", "pax": 6})

    (stored,) = (await store.read_events())["2024-6-1"]
    assert stored["title"] == "Brunch"
    assert stored["pax"] == 6


def test_json_backend_writes_indented_document(tmp_path):
    backend = JsonFileBackend(tmp_path / "nested" / "events.json")
    backend.write({"2024-6-1": [{"id": "1", "title": "Lunch"}]})

    raw = (tmp_path / "nested" / "events.json").read_text()
    assert json.loads(raw) == {"2024-6-1": [{"id": "1", "title": "Lunch"}]}
    assert "\n  " in raw


def test_json_backend_rejects_malformed_file(tmp_path):
    path = tmp_path / "events.json"
    path.write_text("{not json")

    with pytest.raises(StorageError):
        JsonFileBackend(path).read()


async def test_storage_failure_propagates_from_store(failing_store):
    with pytest.raises(StorageError):
        await failing_store.add_event("2024-6-1", {"title": "Lunch"})


class _FakeQuery:
    """Records the chained PostgREST calls made by SupabaseBackend."""

    def __init__(self, table):
        self.table = table
        self.filters = {}
        self.payload = None

    def select(self, columns):
        return self

    def eq(self, column, value):
        self.filters[column] = value
        return self

    def limit(self, n):
        return self

    def upsert(self, payload, on_conflict=None):
        self.payload = payload
        return self

    def execute(self):
        if self.payload is not None:
            self.table.rows[self.payload["key"]] = self.payload
            return type("Response", (), {"data": [self.payload]})()
        row = self.table.rows.get(self.filters.get("key"))
        return type("Response", (), {"data": [row] if row else []})()


class _FakeSupabase:
    def __init__(self):
        self.rows = {}

    def table(self, name):
        return _FakeQuery(self)


def test_supabase_backend_round_trips_document():
    backend = SupabaseBackend(_FakeSupabase(), "calendar_documents", "events")

    assert backend.read() == {}
    backend.write({"2024-6-1": [{"id": "1", "title": "Lunch"}]})
    assert backend.read() == {"2024-6-1": [{"id": "1", "title": "Lunch"}]}


def test_supabase_backend_wraps_client_errors():
    class Broken:
        def table(self, name):
            raise ConnectionError("unreachable")

    with pytest.raises(StorageError):
        SupabaseBackend(Broken(), "calendar_documents", "events").read()


def test_get_backend_rejects_unknown_kind():
    with pytest.raises(ValueError):
        get_backend("mongo")
