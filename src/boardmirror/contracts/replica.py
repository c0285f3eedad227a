"""Replica graph contracts.

The replica is a single document: an advisory ``lastEditedBoardId`` pointer
plus a mapping of board ids to boards. Boards own lists, lists own cards,
cards own checklists, checklists own check-items. Field aliases are the
camelCase keys of the persisted document, so ``model_dump(by_alias=True)``
yields the on-disk shape that external tooling inspects.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class CheckItemState(StrEnum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


class CheckItem(BaseModel):
    id: str
    name: str = ""
    state: CheckItemState = CheckItemState.INCOMPLETE


class Checklist(BaseModel):
    id: str
    name: str = ""
    items: list[CheckItem] = Field(default_factory=list)

    def find_item(self, item_id: str) -> CheckItem | None:
        return next((item for item in self.items if item.id == item_id), None)


class Card(BaseModel):
    id: str
    name: str = ""
    due_date: str | None = Field(default=None, alias="dueDate")
    due_date_complete: bool | None = Field(default=None, alias="dueDateComplete")
    start_date: str | None = Field(default=None, alias="startDate")
    description: str = ""
    archived: bool = False
    checklists: list[Checklist] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def find_checklist(self, checklist_id: str) -> Checklist | None:
        return next((checklist for checklist in self.checklists if checklist.id == checklist_id), None)


class BoardList(BaseModel):
    id: str
    name: str = ""
    closed: bool = False
    cards: list[Card] = Field(default_factory=list)

    def find_card(self, card_id: str) -> Card | None:
        return next((card for card in self.cards if card.id == card_id), None)


class Board(BaseModel):
    id: str
    name: str = ""
    closed: bool = False
    lists: list[BoardList] = Field(default_factory=list)

    def find_list(self, list_id: str) -> BoardList | None:
        return next((board_list for board_list in self.lists if board_list.id == list_id), None)


class ReplicaDocument(BaseModel):
    last_edited_board_id: str | None = Field(default=None, alias="lastEditedBoardId")
    boards: dict[str, Board] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}


class CardLocation(BaseModel):
    """A card found by a board-wide scan, with the id of the list that owns it."""

    card: Card
    list_id: str
