"""
In-memory mirror of the server's EventsData.

One cache belongs to one calendar session. It is replaced wholesale by a full
reload and cleared on logout; the sync controller is its only writer.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from core.validation import parse_date_key, parse_timestamp
from models.events import Event, EventsData


def _start_key(event: Event) -> tuple[int, float]:
    start = event.get("start")
    if not start:
        return (1, 0.0)
    try:
        parsed = parse_timestamp(start)
    except ValueError:
        return (1, 0.0)
    return (0, parsed.timestamp())


@dataclass
class EventsCache:
    data: EventsData = field(default_factory=dict)

    def replace(self, data: EventsData | None) -> None:
        """Swap in a fresh server snapshot."""
        self.data = deepcopy(data) if data else {}

    def clear(self) -> None:
        self.data = {}

    def snapshot(self) -> EventsData:
        return deepcopy(self.data)

    def events_for(self, date_key: str) -> list[Event]:
        return list(self.data.get(date_key, []))

    def events_on(self, day: date) -> list[Event]:
        """Events for a calendar date, whatever the key's zero padding."""
        collected: list[Event] = []
        for key, events in self.data.items():
            try:
                if parse_date_key(key) == day:
                    collected.extend(events)
            except ValueError:
                continue
        return collected

    def events_for_month(self, year: int, month: int) -> list[tuple[str, Event]]:
        """(date key, event) pairs in the month, ordered by start time."""
        pairs: list[tuple[str, Event]] = []
        for key, events in self.data.items():
            try:
                day = parse_date_key(key)
            except ValueError:
                continue
            if day.year == year and day.month == month:
                pairs.extend((key, event) for event in events)
        return sorted(pairs, key=lambda pair: (parse_date_key(pair[0]), _start_key(pair[1])))

    def find_index(self, date_key: str, event_id: Any) -> int:
        target = str(event_id)
        for index, event in enumerate(self.data.get(date_key, [])):
            if str(event.get("id")) == target:
                return index
        return -1

    def append(self, date_key: str, event: Event) -> int:
        """Add at the end of the day's list; returns the new position."""
        day_events = self.data.setdefault(date_key, [])
        day_events.append(event)
        return len(day_events) - 1

    def set_at(self, date_key: str, index: int, event: Event) -> None:
        self.data[date_key][index] = event

    def remove_at(self, date_key: str, index: int) -> Event:
        """Remove and return an entry, dropping the key once it empties."""
        day_events = self.data[date_key]
        removed = day_events.pop(index)
        if not day_events:
            del self.data[date_key]
        return removed

    def insert_at(self, date_key: str, index: int, event: Event) -> None:
        """Re-insert at a position, recreating the key if it was pruned."""
        self.data.setdefault(date_key, []).insert(index, event)
