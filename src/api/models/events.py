"""Pydantic request models for the events API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from core.config import DEFAULT_EVENT_TYPE, EVENT_TYPES, MEAL_MENUS, MEAL_TYPES
from core.validation import meal_type_for_start, normalize_meal_items, parse_timestamp


class EventPayload(BaseModel):
    """
    Event fields as sent by clients.

    Any `id` in the body is ignored; ids are assigned by the store.
    Serialized back to the camelCase wire names with `to_record()`.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    title: str | None = None
    notes: str | None = None
    start: str | None = None
    end: str | None = None
    guest_name: str | None = None
    phone: str | None = None
    pax: int | None = Field(default=None, ge=1)
    venue: str | None = None
    with_food: bool | None = None
    meal: str | None = None
    meal_title: str | None = None
    meal_items: list[str] | None = None
    type: str | None = DEFAULT_EVENT_TYPE
    meal_type: str | None = None

    @field_validator("type", "meal_type", mode="before")
    @classmethod
    def _blank_as_absent(cls, value: Any) -> Any:
        if value == "" or value is None:
            return None
        return value

    @field_validator("type", mode="after")
    @classmethod
    def _check_type(cls, value: str | None) -> str:
        if value is None:
            return DEFAULT_EVENT_TYPE
        if value not in EVENT_TYPES:
            raise ValueError(f"type must be one of {', '.join(sorted(EVENT_TYPES))}")
        return value

    @field_validator("meal_type", mode="after")
    @classmethod
    def _check_meal_type(cls, value: str | None) -> str | None:
        if value is not None and value not in MEAL_TYPES:
            raise ValueError(f"mealType must be one of {', '.join(sorted(MEAL_TYPES))}")
        return value

    @field_validator("meal")
    @classmethod
    def _check_meal(cls, value: str | None) -> str | None:
        # "" means food without a preset menu
        if value and value not in MEAL_MENUS:
            raise ValueError(f"Unknown meal '{value}'")
        return value

    @field_validator("meal_items", mode="before")
    @classmethod
    def _coerce_meal_items(cls, value: Any) -> Any:
        if value is None:
            return None
        return normalize_meal_items(value)

    @field_validator("start", "end")
    @classmethod
    def _check_timestamp(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            parse_timestamp(value)
        except ValueError:
            raise ValueError(f"'{value}' is not an ISO 8601 timestamp")
        return value

    @model_validator(mode="after")
    def _check_range_and_meal_type(self) -> "EventPayload":
        if self.start and self.end:
            start = parse_timestamp(self.start)
            end = parse_timestamp(self.end)
            if (start.tzinfo is None) != (end.tzinfo is None):
                raise ValueError("start and end must both carry or both omit a UTC offset")
            if end < start:
                raise ValueError("End must be after Start")
        if self.meal_type is None and self.start:
            self.meal_type = meal_type_for_start(self.start)
        return self

    def to_record(self) -> dict[str, Any]:
        """Wire-shaped dict with unset optional fields dropped."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CreateEventRequest(BaseModel):
    """POST /api/events body. Presence is checked by the route, not here."""

    model_config = ConfigDict(populate_by_name=True)

    date_key: str | None = Field(default=None, alias="dateKey")
    event: EventPayload | None = None

