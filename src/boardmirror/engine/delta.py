"""Apply push notifications (webhook events) to the replica.

Every handler is idempotent under re-delivery: creating something that
already exists does not duplicate it, removing something already gone is a
no-op. An event that names a board, list, card or checklist the replica does
not have is logged and dropped; ancestors are never fabricated to make room
for a leaf. Nothing here raises for bad input, so one bad event never stops
the events behind it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from boardmirror.contracts.events import (
    BoardEvent,
    CardEvent,
    CheckItemEvent,
    ChecklistEvent,
    EventKind,
    ListEvent,
    UnsupportedEvent,
    WebhookEvent,
)
from boardmirror.contracts.exceptions import MalformedEventError, RemoteFetchError
from boardmirror.contracts.replica import BoardList, Card, CardLocation, CheckItem, CheckItemState, Checklist
from boardmirror.contracts.sync import ApplyOutcome
from boardmirror.engine.events import parse_event
from boardmirror.engine.locks import BoardLocks
from boardmirror.engine.reconcile import merge_fields
from boardmirror.engine.resync import ResyncEngine
from boardmirror.store.store import EntityStore

logger = logging.getLogger(__name__)

APPLIED = ApplyOutcome.APPLIED
NOOP = ApplyOutcome.NOOP
DROPPED = ApplyOutcome.DROPPED


class DeltaApplier:
    """Applies one remote mutation at a time, serialized per board.

    Args:
        store: Replica entity store.
        resync: Optional resync engine. When given, ``createBoard`` pulls the
            new board's default lists and ``reopenBoard`` refreshes the board.
        locks: Per-board lock registry; share it with the resync engine.
    """

    def __init__(
        self,
        store: EntityStore,
        *,
        resync: ResyncEngine | None = None,
        locks: BoardLocks | None = None,
    ) -> None:
        self._store = store
        self._resync = resync
        self._locks = locks or BoardLocks()
        self._handlers: dict[EventKind, Callable[[Any], ApplyOutcome]] = {
            EventKind.CREATE_BOARD: self._create_board,
            EventKind.UPDATE_BOARD: self._update_board,
            EventKind.CLOSE_BOARD: self._close_board,
            EventKind.REOPEN_BOARD: self._reopen_board,
            EventKind.DELETE_BOARD: self._delete_board,
            EventKind.REMOVE_FROM_ORGANIZATION_BOARD: self._delete_board,
            EventKind.CREATE_LIST: self._create_list,
            EventKind.UPDATE_LIST: self._update_list,
            EventKind.DELETE_LIST: self._delete_list,
            EventKind.MOVE_LIST_FROM_BOARD: self._delete_list,
            EventKind.CREATE_CARD: self._create_card,
            EventKind.UPDATE_CARD: self._update_card,
            EventKind.ARCHIVE_CARD: self._archive_card,
            EventKind.UNARCHIVE_CARD: self._archive_card,
            EventKind.DELETE_CARD: self._delete_card,
            EventKind.ADD_CHECKLIST_TO_CARD: self._add_checklist,
            EventKind.REMOVE_CHECKLIST_FROM_CARD: self._remove_checklist,
            EventKind.UPDATE_CHECKLIST: self._update_checklist,
            EventKind.CREATE_CHECK_ITEM: self._create_check_item,
            EventKind.UPDATE_CHECK_ITEM: self._update_check_item,
            EventKind.UPDATE_CHECK_ITEM_STATE_ON_CARD: self._update_check_item,
            EventKind.DELETE_CHECK_ITEM: self._delete_check_item,
        }

    async def apply_event(self, event: WebhookEvent | Mapping[str, Any]) -> ApplyOutcome:
        """Apply a typed event or a raw webhook action."""
        if isinstance(event, Mapping):
            try:
                event = parse_event(event)
            except MalformedEventError as exc:
                logger.warning("Dropping malformed event: %s", exc)
                return DROPPED

        if isinstance(event, UnsupportedEvent):
            logger.info("Unhandled webhook event: %s", event.kind)
            return DROPPED

        handler = self._handlers.get(event.kind)
        if handler is None:  # pragma: no cover
            logger.warning("No handler registered for %s", event.kind)
            return DROPPED

        async with self._locks.hold(event.board_id):
            try:
                outcome = handler(event)
            except ValidationError as exc:
                logger.warning("Dropping %s event with invalid field values: %s", event.kind, exc)
                return DROPPED
        logger.debug("%s on board %s: %s", event.kind, event.board_id, outcome)

        await self._follow_up(event, outcome)
        return outcome

    async def apply_events(self, events: Iterable[WebhookEvent | Mapping[str, Any]]) -> list[ApplyOutcome]:
        return [await self.apply_event(event) for event in events]

    async def _follow_up(self, event: WebhookEvent, outcome: ApplyOutcome) -> None:
        if self._resync is None or outcome == DROPPED:
            return
        try:
            if event.kind == EventKind.CREATE_BOARD and outcome == APPLIED:
                await self._resync.sync_lists(event.board_id)
            elif event.kind == EventKind.REOPEN_BOARD:
                await self._resync.refresh_board_data(event.board_id)
        except RemoteFetchError as exc:
            logger.error("Follow-up fetch for %s on board %s failed: %s", event.kind, event.board_id, exc)

    # ------------------------------------------------------------------
    # Boards
    # ------------------------------------------------------------------

    def _create_board(self, event: BoardEvent) -> ApplyOutcome:
        existing = self._store.get_board(event.board_id)
        if existing is None:
            self._store.save_board(
                event.board_id, event.changes.get("name") or "", bool(event.changes.get("closed", False))
            )
            return APPLIED
        return self._merge_board(event.board_id, {"name": event.changes["name"]} if "name" in event.changes else {})

    def _update_board(self, event: BoardEvent) -> ApplyOutcome:
        return self._merge_board(event.board_id, event.changes)

    def _close_board(self, event: BoardEvent) -> ApplyOutcome:
        return self._merge_board(event.board_id, {"closed": True})

    def _reopen_board(self, event: BoardEvent) -> ApplyOutcome:
        return self._merge_board(event.board_id, {"closed": False})

    def _merge_board(self, board_id: str, changes: Mapping[str, Any]) -> ApplyOutcome:
        existing = self._store.get_board(board_id)
        if existing is None:
            logger.warning("Board not found in replica: %s", board_id)
            return DROPPED
        merged = merge_fields(existing, changes, changes.keys())
        if merged == existing:
            return NOOP
        self._store.upsert_board(merged)
        logger.info("Board updated: %s %s", board_id, dict(changes))
        return APPLIED

    def _delete_board(self, event: BoardEvent) -> ApplyOutcome:
        return APPLIED if self._store.delete_board(event.board_id) else NOOP

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def _create_list(self, event: ListEvent) -> ApplyOutcome:
        if self._store.get_board(event.board_id) is None:
            logger.warning("Board %s not found; list %s dropped", event.board_id, event.list_id)
            return DROPPED
        board_list = BoardList(
            id=event.list_id,
            name=event.changes.get("name") or "",
            closed=bool(event.changes.get("closed", False)),
        )
        return APPLIED if self._store.add_list(event.board_id, board_list) else NOOP

    def _update_list(self, event: ListEvent) -> ApplyOutcome:
        existing = self._store.get_list(event.board_id, event.list_id)
        if existing is None:
            logger.warning("List %s not found on board %s", event.list_id, event.board_id)
            return DROPPED
        merged = merge_fields(existing, event.changes, event.changes.keys())
        if merged == existing:
            return NOOP
        self._store.put_list(event.board_id, merged)
        logger.info("List updated: %s %s", event.list_id, event.changes)
        return APPLIED

    def _delete_list(self, event: ListEvent) -> ApplyOutcome:
        if self._store.get_board(event.board_id) is None:
            logger.warning("Board %s not found; list deletion %s dropped", event.board_id, event.list_id)
            return DROPPED
        if self._store.get_list(event.board_id, event.list_id) is None:
            return NOOP
        self._store.delete_list(event.board_id, event.list_id)
        return APPLIED

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def _locate_card(self, event: CardEvent | ChecklistEvent | CheckItemEvent) -> CardLocation | None:
        list_id = getattr(event, "list_id", None)
        if list_id is not None:
            card = self._store.get_card(event.board_id, list_id, event.card_id)
            if card is not None:
                return CardLocation(card=card, list_id=list_id)
        return self._store.find_card_anywhere(event.board_id, event.card_id)

    def _create_card(self, event: CardEvent) -> ApplyOutcome:
        assert event.list_id is not None
        if self._store.get_list(event.board_id, event.list_id) is None:
            logger.warning(
                "List %s not found on board %s; card %s dropped", event.list_id, event.board_id, event.card_id
            )
            return DROPPED
        if self._store.find_card_anywhere(event.board_id, event.card_id) is not None:
            logger.debug("Card %s already present on board %s", event.card_id, event.board_id)
            return NOOP
        card = Card(
            id=event.card_id,
            name=event.changes.get("name") or "",
            due_date=None,
            start_date=None,
            checklists=[],
            description="",
        )
        self._store.add_card(event.board_id, event.list_id, card)
        return APPLIED

    def _update_card(self, event: CardEvent) -> ApplyOutcome:
        if event.is_move:
            return self._move_card(event)
        return self._patch_card(event, event.changes)

    def _archive_card(self, event: CardEvent) -> ApplyOutcome:
        return self._patch_card(event, {"archived": event.kind == EventKind.ARCHIVE_CARD})

    def _patch_card(self, event: CardEvent, changes: Mapping[str, Any]) -> ApplyOutcome:
        location = self._locate_card(event)
        if location is None:
            logger.warning("Card %s not found on board %s", event.card_id, event.board_id)
            return DROPPED
        merged = merge_fields(location.card, changes, changes.keys())
        if merged == location.card:
            return NOOP
        self._store.put_card(event.board_id, location.list_id, merged)
        logger.info("Card updated: %s %s", event.card_id, sorted(changes))
        return APPLIED

    def _move_card(self, event: CardEvent) -> ApplyOutcome:
        assert event.list_before_id is not None and event.list_after_id is not None
        if self._store.get_list(event.board_id, event.list_after_id) is None:
            logger.warning("Destination list %s not found on board %s", event.list_after_id, event.board_id)
            return DROPPED
        location = self._store.find_card_anywhere(event.board_id, event.card_id)
        if location is None:
            logger.warning("Card %s not found on board %s; move dropped", event.card_id, event.board_id)
            return DROPPED
        if location.list_id == event.list_after_id:
            return NOOP
        if location.list_id != event.list_before_id:
            logger.info(
                "Card %s is in list %s, not %s; moving from where it is",
                event.card_id,
                location.list_id,
                event.list_before_id,
            )
        moved = self._store.move_card(event.board_id, event.card_id, location.list_id, event.list_after_id)
        return APPLIED if moved else DROPPED

    def _delete_card(self, event: CardEvent) -> ApplyOutcome:
        if self._store.get_board(event.board_id) is None:
            logger.warning("Board %s not found; card deletion %s dropped", event.board_id, event.card_id)
            return DROPPED
        location = self._locate_card(event)
        if location is None:
            return NOOP
        self._store.delete_card(event.board_id, location.list_id, event.card_id)
        return APPLIED

    # ------------------------------------------------------------------
    # Checklists and check-items
    # ------------------------------------------------------------------

    def _write_checklists(
        self, event: WebhookEvent, location: CardLocation, checklists: list[Checklist]
    ) -> ApplyOutcome:
        merged = merge_fields(location.card, {"checklists": checklists}, ("checklists",))
        if merged == location.card:
            return NOOP
        self._store.put_card(event.board_id, location.list_id, merged)
        logger.info("%s applied to card %s", event.kind, location.card.id)
        return APPLIED

    def _card_for(self, event: ChecklistEvent | CheckItemEvent) -> CardLocation | None:
        location = self._locate_card(event)
        if location is None:
            logger.warning("Card %s not found on board %s; %s dropped", event.card_id, event.board_id, event.kind)
        return location

    def _add_checklist(self, event: ChecklistEvent) -> ApplyOutcome:
        location = self._card_for(event)
        if location is None:
            return DROPPED
        checklists = list(location.card.checklists)
        existing = location.card.find_checklist(event.checklist_id)
        if existing is None:
            checklists.append(Checklist(id=event.checklist_id, name=event.name or ""))
        elif event.name is not None:
            renamed = merge_fields(existing, {"name": event.name}, ("name",))
            checklists = [renamed if checklist.id == existing.id else checklist for checklist in checklists]
        return self._write_checklists(event, location, checklists)

    def _remove_checklist(self, event: ChecklistEvent) -> ApplyOutcome:
        location = self._card_for(event)
        if location is None:
            return DROPPED
        checklists = [checklist for checklist in location.card.checklists if checklist.id != event.checklist_id]
        return self._write_checklists(event, location, checklists)

    def _update_checklist(self, event: ChecklistEvent) -> ApplyOutcome:
        location = self._card_for(event)
        if location is None:
            return DROPPED
        existing = location.card.find_checklist(event.checklist_id)
        if existing is None:
            logger.warning("Checklist %s not found on card %s", event.checklist_id, event.card_id)
            return DROPPED
        if event.name is None:
            return NOOP
        renamed = merge_fields(existing, {"name": event.name}, ("name",))
        checklists = [renamed if checklist.id == existing.id else checklist for checklist in location.card.checklists]
        return self._write_checklists(event, location, checklists)

    def _with_items(
        self, event: CheckItemEvent, edit: Callable[[Checklist], Checklist | None]
    ) -> ApplyOutcome:
        location = self._card_for(event)
        if location is None:
            return DROPPED
        checklist = location.card.find_checklist(event.checklist_id)
        if checklist is None:
            logger.warning(
                "Checklist %s not found on card %s; %s dropped", event.checklist_id, event.card_id, event.kind
            )
            return DROPPED
        edited = edit(checklist)
        if edited is None:
            return DROPPED
        checklists = [edited if candidate.id == checklist.id else candidate for candidate in location.card.checklists]
        return self._write_checklists(event, location, checklists)

    def _create_check_item(self, event: CheckItemEvent) -> ApplyOutcome:
        def edit(checklist: Checklist) -> Checklist:
            existing = checklist.find_item(event.check_item_id)
            if existing is None:
                item = CheckItem(
                    id=event.check_item_id,
                    name=event.changes.get("name") or "",
                    state=event.changes.get("state", CheckItemState.INCOMPLETE),
                )
                items = [*checklist.items, item]
            else:
                updated = merge_fields(existing, event.changes, event.changes.keys())
                items = [updated if item.id == existing.id else item for item in checklist.items]
            return merge_fields(checklist, {"items": items}, ("items",))

        return self._with_items(event, edit)

    def _update_check_item(self, event: CheckItemEvent) -> ApplyOutcome:
        def edit(checklist: Checklist) -> Checklist | None:
            existing = checklist.find_item(event.check_item_id)
            if existing is None:
                logger.warning("Check-item %s not found in checklist %s", event.check_item_id, event.checklist_id)
                return None
            updated = merge_fields(existing, event.changes, event.changes.keys())
            items = [updated if item.id == existing.id else item for item in checklist.items]
            return merge_fields(checklist, {"items": items}, ("items",))

        return self._with_items(event, edit)

    def _delete_check_item(self, event: CheckItemEvent) -> ApplyOutcome:
        def edit(checklist: Checklist) -> Checklist:
            items = [item for item in checklist.items if item.id != event.check_item_id]
            return merge_fields(checklist, {"items": items}, ("items",))

        return self._with_items(event, edit)
