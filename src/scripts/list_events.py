#!/usr/bin/env python3
"""
Print stored events grouped by date.

Usage:
    uv run python src/scripts/list_events.py [--month 2024-6]
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.database import StorageError, get_backend
from core.validation import meal_type_for_start, parse_date_key
from services.events import EventStore


def parse_month(value: str) -> tuple[int, int]:
    """Parse a YYYY-M month filter."""
    parts = value.strip().split("-")
    try:
        year, month = (int(part) for part in parts)
    except ValueError:
        raise ValueError(f"Invalid month '{value}', expected YYYY-M")
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month '{value}', expected YYYY-M")
    return year, month


def _sort_key(date_key: str):
    try:
        return (0, parse_date_key(date_key))
    except ValueError:
        return (1, date_key)


async def main():
    """List events from the configured backend."""
    parser = argparse.ArgumentParser(description="List stored calendar events")
    parser.add_argument("--month", help="Only show one month, as YYYY-M")
    args = parser.parse_args()

    try:
        year_month = parse_month(args.month) if args.month else None
        events = await EventStore(get_backend()).read_events()
    except (StorageError, ValueError) as e:
        print(f"\nError: {e}")
        sys.exit(1)

    total = 0
    for date_key in sorted(events, key=_sort_key):
        sort_key = _sort_key(date_key)
        if year_month and (sort_key[0] or (sort_key[1].year, sort_key[1].month) != year_month):
            continue

        print(f"\n{date_key}")
        for event in events[date_key]:
            meal_type = event.get("mealType") or meal_type_for_start(event.get("start")) or "-"
            print(
                f"  [{event.get('id')}] {event.get('title') or '(untitled)'}"
                f" | {event.get('type', 'booking')} | {meal_type}"
                f" | pax {event.get('pax', '-')} | {event.get('venue') or '-'}"
            )
            total += 1

    print(f"\n{total} events")


if __name__ == "__main__":
    asyncio.run(main())
