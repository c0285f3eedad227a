"""Parse raw webhook actions into typed events.

A raw action is the JSON object the remote service posts for each mutation::

    {"type": "updateCard", "data": {"board": {...}, "card": {...}, "list": {...}}}

Correlation ids are validated here, before anything reaches the store, so the
applier only ever sees events that carry what their kind needs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from boardmirror.contracts.events import (
    BOARD_KINDS,
    CARD_KINDS,
    CHECK_ITEM_KINDS,
    CHECKLIST_KINDS,
    LIST_KINDS,
    BoardEvent,
    CardEvent,
    CheckItemEvent,
    ChecklistEvent,
    EventKind,
    ListEvent,
    UnsupportedEvent,
    WebhookEvent,
)
from boardmirror.contracts.exceptions import MalformedEventError
from boardmirror.contracts.replica import CheckItemState
from boardmirror.engine.reconcile import BOARD_FIELDS, CARD_FIELDS, CHECK_ITEM_FIELDS, LIST_FIELDS, present_fields


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    value = data.get(key)
    return value if isinstance(value, Mapping) else None


def _optional_id(data: Mapping[str, Any], key: str) -> str | None:
    section = _section(data, key)
    if section is None:
        return None
    value = section.get("id")
    return value if isinstance(value, str) and value else None


def _require_id(data: Mapping[str, Any], key: str, kind: str) -> str:
    value = _optional_id(data, key)
    if value is None:
        raise MalformedEventError(f"{kind} event is missing {key}.id", kind=kind)
    return value


def _check_item_changes(payload: Mapping[str, Any], kind: str) -> dict[str, Any]:
    changes = present_fields(payload, CHECK_ITEM_FIELDS)
    if "state" in changes:
        try:
            changes["state"] = CheckItemState(changes["state"])
        except ValueError as exc:
            state = changes["state"]
            raise MalformedEventError(f"{kind} event has invalid check-item state: {state!r}", kind=kind) from exc
    return changes


def parse_event(action: Mapping[str, Any]) -> WebhookEvent:
    """Build the typed event for one raw webhook action.

    Unknown action types become :class:`UnsupportedEvent`.

    Raises:
        MalformedEventError: If the action has no type/data or lacks a
            correlation id its kind requires.
    """
    raw_kind = action.get("type")
    if not isinstance(raw_kind, str) or not raw_kind:
        raise MalformedEventError("webhook action is missing its type")
    data = action.get("data")
    if not isinstance(data, Mapping):
        raise MalformedEventError(f"{raw_kind} event is missing its data payload", kind=raw_kind)

    try:
        kind = EventKind(raw_kind)
    except ValueError:
        return UnsupportedEvent(kind=raw_kind, board_id=_optional_id(data, "board"))

    board_id = _require_id(data, "board", kind)

    if kind in BOARD_KINDS:
        return BoardEvent(kind=kind, board_id=board_id, changes=present_fields(data["board"], BOARD_FIELDS))

    if kind in LIST_KINDS:
        list_id = _require_id(data, "list", kind)
        changes = present_fields(data["list"], LIST_FIELDS)
        return ListEvent(kind=kind, board_id=board_id, list_id=list_id, changes=changes)

    if kind in CARD_KINDS:
        card_id = _require_id(data, "card", kind)
        list_id = _optional_id(data, "list")
        if kind == EventKind.CREATE_CARD and list_id is None:
            raise MalformedEventError(f"{kind} event is missing list.id", kind=kind)
        return CardEvent(
            kind=kind,
            board_id=board_id,
            card_id=card_id,
            list_id=list_id,
            list_before_id=_optional_id(data, "listBefore"),
            list_after_id=_optional_id(data, "listAfter"),
            changes=present_fields(data["card"], CARD_FIELDS),
        )

    if kind in CHECKLIST_KINDS:
        checklist = _section(data, "checklist")
        name = checklist.get("name") if checklist is not None else None
        return ChecklistEvent(
            kind=kind,
            board_id=board_id,
            card_id=_require_id(data, "card", kind),
            checklist_id=_require_id(data, "checklist", kind),
            name=name if isinstance(name, str) else None,
        )

    if kind in CHECK_ITEM_KINDS:
        card_id = _require_id(data, "card", kind)
        checklist_id = _require_id(data, "checklist", kind)
        check_item_id = _require_id(data, "checkItem", kind)
        return CheckItemEvent(
            kind=kind,
            board_id=board_id,
            card_id=card_id,
            checklist_id=checklist_id,
            check_item_id=check_item_id,
            changes=_check_item_changes(data["checkItem"], kind),
        )

    raise MalformedEventError(f"no parser for event kind {kind}", kind=kind)  # pragma: no cover
