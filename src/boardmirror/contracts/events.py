"""Webhook event contracts.

Each remote mutation notification is parsed into one of a closed set of
event models. Every model carries only the correlation ids its kind needs
plus, where the kind patches fields, a ``changes`` mapping whose keys are
exactly the replica fields the remote payload reported.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class EventKind(StrEnum):
    CREATE_BOARD = "createBoard"
    UPDATE_BOARD = "updateBoard"
    CLOSE_BOARD = "closeBoard"
    REOPEN_BOARD = "reopenBoard"
    DELETE_BOARD = "deleteBoard"
    REMOVE_FROM_ORGANIZATION_BOARD = "removeFromOrganizationBoard"

    CREATE_LIST = "createList"
    UPDATE_LIST = "updateList"
    DELETE_LIST = "deleteList"
    MOVE_LIST_FROM_BOARD = "moveListFromBoard"

    CREATE_CARD = "createCard"
    UPDATE_CARD = "updateCard"
    ARCHIVE_CARD = "archiveCard"
    UNARCHIVE_CARD = "unarchiveCard"
    DELETE_CARD = "deleteCard"

    ADD_CHECKLIST_TO_CARD = "addChecklistToCard"
    REMOVE_CHECKLIST_FROM_CARD = "removeChecklistFromCard"
    UPDATE_CHECKLIST = "updateChecklist"

    CREATE_CHECK_ITEM = "createCheckItem"
    UPDATE_CHECK_ITEM = "updateCheckItem"
    UPDATE_CHECK_ITEM_STATE_ON_CARD = "updateCheckItemStateOnCard"
    DELETE_CHECK_ITEM = "deleteCheckItem"


BOARD_KINDS = frozenset(
    {
        EventKind.CREATE_BOARD,
        EventKind.UPDATE_BOARD,
        EventKind.CLOSE_BOARD,
        EventKind.REOPEN_BOARD,
        EventKind.DELETE_BOARD,
        EventKind.REMOVE_FROM_ORGANIZATION_BOARD,
    }
)
LIST_KINDS = frozenset(
    {EventKind.CREATE_LIST, EventKind.UPDATE_LIST, EventKind.DELETE_LIST, EventKind.MOVE_LIST_FROM_BOARD}
)
CARD_KINDS = frozenset(
    {
        EventKind.CREATE_CARD,
        EventKind.UPDATE_CARD,
        EventKind.ARCHIVE_CARD,
        EventKind.UNARCHIVE_CARD,
        EventKind.DELETE_CARD,
    }
)
CHECKLIST_KINDS = frozenset(
    {EventKind.ADD_CHECKLIST_TO_CARD, EventKind.REMOVE_CHECKLIST_FROM_CARD, EventKind.UPDATE_CHECKLIST}
)
CHECK_ITEM_KINDS = frozenset(
    {
        EventKind.CREATE_CHECK_ITEM,
        EventKind.UPDATE_CHECK_ITEM,
        EventKind.UPDATE_CHECK_ITEM_STATE_ON_CARD,
        EventKind.DELETE_CHECK_ITEM,
    }
)


class BoardEvent(BaseModel):
    kind: EventKind
    board_id: str
    changes: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


class ListEvent(BaseModel):
    kind: EventKind
    board_id: str
    list_id: str
    changes: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


class CardEvent(BaseModel):
    kind: EventKind
    board_id: str
    card_id: str
    list_id: str | None = None
    list_before_id: str | None = None
    list_after_id: str | None = None
    changes: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def is_move(self) -> bool:
        return self.list_before_id is not None and self.list_after_id is not None


class ChecklistEvent(BaseModel):
    kind: EventKind
    board_id: str
    card_id: str
    checklist_id: str
    name: str | None = None

    model_config = {"frozen": True}


class CheckItemEvent(BaseModel):
    kind: EventKind
    board_id: str
    card_id: str
    checklist_id: str
    check_item_id: str
    changes: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


class UnsupportedEvent(BaseModel):
    """An action whose type is not one of :class:`EventKind`."""

    kind: str
    board_id: str | None = None

    model_config = {"frozen": True}


WebhookEvent = BoardEvent | ListEvent | CardEvent | ChecklistEvent | CheckItemEvent | UnsupportedEvent
