"""Raw webhook action builders."""

from __future__ import annotations

from typing import Any


def action(kind: str, **data: Any) -> dict[str, Any]:
    """Build a raw webhook action; ``board`` defaults to ``{"id": "b1"}``."""
    data.setdefault("board", {"id": "b1"})
    return {"type": kind, "data": data}
