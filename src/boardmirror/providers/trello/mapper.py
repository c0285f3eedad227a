"""Map raw Trello REST payloads onto remote record contracts."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from boardmirror.contracts.exceptions import RemoteFetchError
from boardmirror.contracts.remote import RemoteBoard, RemoteCard, RemoteList


def _require_list(payload: Any, what: str) -> list[Any]:
    if not isinstance(payload, list):
        raise RemoteFetchError(f"Malformed {what} response: expected a JSON array")
    return payload


def parse_cards(payload: Any) -> list[RemoteCard]:
    try:
        return [RemoteCard.model_validate(raw) for raw in _require_list(payload, "cards")]
    except ValidationError as exc:
        raise RemoteFetchError(f"Malformed cards response: {exc}") from exc


def parse_lists(payload: Any) -> list[RemoteList]:
    try:
        return [RemoteList.model_validate(raw) for raw in _require_list(payload, "lists")]
    except ValidationError as exc:
        raise RemoteFetchError(f"Malformed lists response: {exc}") from exc


def parse_board(payload: Any) -> RemoteBoard:
    """Build a board record, nesting cards under their lists.

    ``GET /boards/{id}?lists=open&cards=visible`` returns ``lists`` and
    ``cards`` side by side, each card naming its list in ``idList``. Cards
    whose list was not returned (closed lists) are left out.
    """
    if not isinstance(payload, dict):
        raise RemoteFetchError("Malformed board response: expected a JSON object")

    raw_lists = payload.get("lists") or []
    raw_cards = payload.get("cards") or []
    cards_by_list: dict[str, list[Any]] = {}
    for raw_card in _require_list(raw_cards, "board cards"):
        if isinstance(raw_card, dict) and isinstance(raw_card.get("idList"), str):
            cards_by_list.setdefault(raw_card["idList"], []).append(raw_card)

    lists: list[dict[str, Any]] = []
    for raw_list in _require_list(raw_lists, "board lists"):
        if not isinstance(raw_list, dict):
            raise RemoteFetchError("Malformed board response: list entry is not an object")
        nested = raw_list.get("cards")
        cards = nested if nested is not None else cards_by_list.get(str(raw_list.get("id")), [])
        lists.append({**raw_list, "cards": cards})

    try:
        return RemoteBoard.model_validate({**payload, "lists": lists})
    except ValidationError as exc:
        raise RemoteFetchError(f"Malformed board response: {exc}") from exc
