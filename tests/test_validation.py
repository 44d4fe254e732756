"""Tests for date keys, meal derivation and payload coercion."""

from datetime import date

import pytest

from api.models.events import EventPayload
from core.config import MEAL_MENUS
from core.validation import (
    default_menu,
    meal_type_for_start,
    normalize_meal_items,
    parse_date_key,
    to_date_key,
)


def test_date_keys_are_unpadded():
    assert to_date_key(date(2024, 6, 1)) == "2024-6-1"


@pytest.mark.parametrize("key", ["2024-6-1", "2024-06-01", " 2024-6-01 "])
def test_date_keys_parse_with_or_without_padding(key):
    assert parse_date_key(key) == date(2024, 6, 1)


@pytest.mark.parametrize("key", ["2024-13-1", "2024-6", "june-1-2024", ""])
def test_bad_date_keys_raise(key):
    with pytest.raises(ValueError):
        parse_date_key(key)


@pytest.mark.parametrize(
    "start, expected",
    [
        ("2024-06-01T06:00:00", "breakfast"),
        ("2024-06-01T11:59:00", "breakfast"),
        ("2024-06-01T12:00:00", "lunch"),
        ("2024-06-01T17:59:00", "lunch"),
        ("2024-06-01T18:00:00", "dinner"),
        ("2024-06-01T02:00:00", "dinner"),
        ("2024-06-01T09:00:00Z", "breakfast"),
        (None, None),
        ("not a time", None),
    ],
)
def test_meal_type_follows_start_hour(start, expected):
    assert meal_type_for_start(start) == expected


def test_meal_items_accept_legacy_newline_string():
    assert normalize_meal_items("Qorma\n\n Naan \n") == ["Qorma", "Naan"]
    assert normalize_meal_items(["Raita", "  "]) == ["Raita"]


def test_default_menu_is_a_copy():
    menu = default_menu("mutton-qorma")
    menu.append("extra")

    assert default_menu("mutton-qorma")[0] == "Mutton Qorma"
    assert "extra" not in default_menu("mutton-qorma")
    assert default_menu("unknown") == []


def test_payload_keeps_explicit_meal_type_and_blank_type_defaults():
    payload = EventPayload.model_validate(
        {"start": "2024-06-01T08:00:00", "mealType": "dinner", "type": ""}
    )

    record = payload.to_record()
    assert record["mealType"] == "dinner"
    assert record["type"] == "booking"


def test_payload_rejects_mixed_offsets():
    with pytest.raises(ValueError):
        EventPayload.model_validate(
            {"start": "2024-06-01T08:00:00Z", "end": "2024-06-01T09:00:00"}
        )


def test_payload_meal_follows_configured_menus(monkeypatch):
    monkeypatch.setitem(MEAL_MENUS, "daal-chawal", ["Daal", "Chawal"])

    assert EventPayload.model_validate({"meal": "daal-chawal"}).meal == "daal-chawal"
    assert EventPayload.model_validate({"meal": ""}).meal == ""
    with pytest.raises(ValueError):
        EventPayload.model_validate({"meal": "biryani"})


@pytest.mark.parametrize("field, value", [("type", "wedding"), ("mealType", "brunch")])
def test_payload_rejects_unknown_vocabulary(field, value):
    with pytest.raises(ValueError):
        EventPayload.model_validate({"title": "Lunch", field: value})
