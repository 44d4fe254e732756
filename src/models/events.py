"""
Data models for calendar events.

Stored events are plain dictionaries; TypedDict gives them names for type hints.
Wire validation lives in api.models.events.
"""

from typing import Literal, TypedDict

EventType = Literal["booking", "reservation"]
MealType = Literal["breakfast", "lunch", "dinner"]


class Event(TypedDict, total=False):
    """One booking or reservation as stored under a date key."""
    id: str
    title: str
    notes: str
    start: str
    end: str
    guestName: str
    phone: str
    pax: int
    venue: str
    withFood: bool
    meal: str
    mealTitle: str
    mealItems: list[str]
    type: EventType
    mealType: MealType


# date key ('YYYY-M-D') -> events in display order
EventsData = dict[str, list[Event]]
