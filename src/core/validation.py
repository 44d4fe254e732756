"""
Date-key handling and booking field rules.
"""

from datetime import date, datetime

from core.config import MEAL_MENUS


def to_date_key(day: date) -> str:
    """Format a date as a 'YYYY-M-D' key (no zero padding)."""
    return f"{day.year}-{day.month}-{day.day}"


def parse_date_key(key: str) -> date:
    """
    Parse a 'YYYY-M-D' key. Zero-padded parts ('2024-06-01') are accepted.

    Raises:
        ValueError: if the key is not three dash-separated integers forming a date
    """
    parts = key.strip().split("-")
    if len(parts) != 3:
        raise ValueError(f"Invalid date key '{key}'")
    try:
        year, month, day = (int(part) for part in parts)
    except ValueError:
        raise ValueError(f"Invalid date key '{key}'")
    return date(year, month, day)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, tolerating a trailing 'Z'."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def meal_type_for_start(start: str | datetime | None) -> str | None:
    """
    Derive the meal slot from the start hour.

    06:00-11:59 is breakfast, 12:00-17:59 is lunch, anything else is dinner.
    Returns None when the start is missing or unparseable.
    """
    if not start:
        return None
    if isinstance(start, str):
        try:
            start = parse_timestamp(start)
        except ValueError:
            return None

    hour = start.hour
    if 6 <= hour < 12:
        return "breakfast"
    if 12 <= hour < 18:
        return "lunch"
    return "dinner"


def normalize_meal_items(value) -> list[str]:
    """Accept a list or a newline-separated string; drop blank entries."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split("\n")
    return [str(item).strip() for item in value if str(item).strip()]


def default_menu(meal: str) -> list[str]:
    """Preset menu items for a meal identifier (empty for unknown meals)."""
    return list(MEAL_MENUS.get(meal, []))
