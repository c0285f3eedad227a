import pytest

from boardmirror.contracts.replica import Card, CheckItem, CheckItemState
from boardmirror.engine.reconcile import CARD_FIELDS, merge_fields, present_fields


def test_present_fields_maps_only_keys_in_payload() -> None:
    payload = {"id": "c1", "name": "Renamed", "due": None, "idList": "L1"}

    assert present_fields(payload, CARD_FIELDS) == {"name": "Renamed", "due_date": None}


def test_merge_overwrites_present_keys_including_explicit_null() -> None:
    existing = Card(id="c1", name="Old", due_date="2024-01-01", description="keep me")

    merged = merge_fields(existing, {"name": "New", "due_date": None}, ["name", "due_date"])

    assert merged.name == "New"
    assert merged.due_date is None
    assert merged.description == "keep me"
    assert existing.name == "Old"


def test_merge_leaves_absent_keys_untouched() -> None:
    existing = Card(id="c1", name="Old", start_date="2024-02-01", archived=True)

    merged = merge_fields(existing, {"name": "New", "archived": False}, ["name"])

    assert merged.archived is True
    assert merged.start_date == "2024-02-01"


def test_merge_applies_false_and_empty_values() -> None:
    existing = Card(id="c1", name="Old", archived=True, description="text")

    merged = merge_fields(existing, {"archived": False, "description": ""}, ["archived", "description"])

    assert merged.archived is False
    assert merged.description == ""


def test_merge_with_no_keys_returns_equal_copy() -> None:
    existing = Card(id="c1", name="Old")

    merged = merge_fields(existing, {}, [])

    assert merged == existing
    assert merged is not existing


def test_merge_accepts_model_as_incoming() -> None:
    existing = CheckItem(id="ci1", name="Draft")
    incoming = CheckItem(id="other", name="Ignored", state=CheckItemState.COMPLETE)

    merged = merge_fields(existing, incoming, ["state"])

    assert merged == CheckItem(id="ci1", name="Draft", state=CheckItemState.COMPLETE)


def test_merge_rejects_unknown_fields() -> None:
    with pytest.raises(ValueError, match="color"):
        merge_fields(Card(id="c1"), {"color": "red"}, ["color"])
