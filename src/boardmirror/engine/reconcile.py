"""Field-presence reconciliation shared by the resync engine and the delta applier.

A remote payload only overwrites the replica fields it actually carried.
Presence, not value, decides: an explicit ``None`` or ``False`` in the
payload overwrites, an absent key leaves the local value alone.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)

BOARD_FIELDS: dict[str, str] = {"name": "name", "closed": "closed"}
LIST_FIELDS: dict[str, str] = {"name": "name", "closed": "closed"}
CARD_FIELDS: dict[str, str] = {
    "name": "name",
    "desc": "description",
    "closed": "archived",
    "due": "due_date",
    "dueComplete": "due_date_complete",
    "start": "start_date",
}
CHECK_ITEM_FIELDS: dict[str, str] = {"name": "name", "state": "state"}


def present_fields(payload: Mapping[str, Any], field_map: Mapping[str, str]) -> dict[str, Any]:
    """Translate the remote keys present in *payload* into replica field names."""
    return {target: payload[source] for source, target in field_map.items() if source in payload}


def merge_fields(existing: M, incoming: BaseModel | Mapping[str, Any], present_keys: Iterable[str]) -> M:
    """Return a copy of *existing* with every key in *present_keys* taken from *incoming*."""
    keys = list(dict.fromkeys(present_keys))
    model_fields = type(existing).model_fields
    unknown = [key for key in keys if key not in model_fields]
    if unknown:
        raise ValueError(f"{type(existing).__name__} has no field(s): {', '.join(sorted(unknown))}")

    if isinstance(incoming, BaseModel):
        updates = {key: getattr(incoming, key) for key in keys}
    else:
        updates = {key: incoming[key] for key in keys}

    merged = existing.model_dump()
    merged.update(updates)
    return type(existing).model_validate(merged)
