#!/usr/bin/env python3
"""
Copy a legacy events.json into the configured events backend.

Numeric ids from older files are rewritten as strings and empty date groups
are dropped. Events already stored under the same date key and id are kept.

Usage:
    uv run python src/scripts/migrate_events.py <events.json> [--backend supabase]

Example:
    uv run python src/scripts/migrate_events.py assets/data/events.json --dry-run
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.database import JsonFileBackend, StorageError, get_backend
from core.validation import parse_date_key
from services.events import generate_event_id


def normalize_events(legacy: dict) -> tuple[dict, list[str]]:
    """Return (normalized mapping, warnings)."""
    normalized: dict[str, list[dict]] = {}
    warnings: list[str] = []

    for date_key, events in legacy.items():
        try:
            parse_date_key(date_key)
        except ValueError:
            warnings.append(f"Skipping invalid date key '{date_key}'")
            continue
        if not isinstance(events, list) or not events:
            continue

        seen: set[str] = set()
        day_events = []
        for event in events:
            if not isinstance(event, dict):
                warnings.append(f"Skipping non-object entry under {date_key}")
                continue
            event_id = event.get("id")
            if event_id in (None, "") or str(event_id) in seen:
                event_id = generate_event_id(seen)
                warnings.append(f"Assigned new id {event_id} under {date_key}")
            seen.add(str(event_id))
            day_events.append({**event, "id": str(event_id)})

        if day_events:
            normalized[date_key] = day_events

    return normalized, warnings


def merge_into(existing: dict, incoming: dict) -> int:
    """Append incoming events missing from `existing`; returns how many were added."""
    added = 0
    for date_key, events in incoming.items():
        current = existing.setdefault(date_key, [])
        current_ids = {str(e.get("id")) for e in current}
        for event in events:
            if event["id"] not in current_ids:
                current.append(event)
                current_ids.add(event["id"])
                added += 1
    return added


def main():
    parser = argparse.ArgumentParser(
        description="Import a legacy events.json into the events backend"
    )
    parser.add_argument("input_file", type=Path, help="Path to the legacy events.json")
    parser.add_argument(
        "--backend",
        choices=["file", "supabase"],
        default=None,
        help="Target backend (defaults to EVENTS_BACKEND)",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Report what would change without writing"
    )
    args = parser.parse_args()

    try:
        legacy = JsonFileBackend(args.input_file).read()
        normalized, warnings = normalize_events(legacy)
        for warning in warnings:
            print(f"  - {warning}")

        backend = get_backend(args.backend)
        existing = backend.read()
        added = merge_into(existing, normalized)

        print(f"{added} events to import across {len(normalized)} dates")
        if args.dry_run:
            print("Dry run: nothing written")
            return
        backend.write(existing)
        print("Import complete")
    except (StorageError, ValueError) as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
