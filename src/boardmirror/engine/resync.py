"""Pull-based resync of the replica against the remote service.

Three consistency levels are offered and kept apart:

* :meth:`ResyncEngine.sync_lists` repairs list membership only.
* :meth:`ResyncEngine.sync_cards` merges one list's cards without clearing
  anything, detecting cards that moved in from another list.
* :meth:`ResyncEngine.refresh_board_data` is a hard reset: every list and card
  of the board is rebuilt from the board payload, dropping start dates and
  checklists the payload does not carry.

Resyncs are best effort: a :class:`RemoteFetchError` aborts the current scope
and propagates, and whatever was already written stays written.
"""

from __future__ import annotations

import asyncio
import logging

from boardmirror.contracts.exceptions import BoardMirrorError, RemoteFetchError
from boardmirror.contracts.remote import RemoteBoard, RemoteCard, RemoteClient
from boardmirror.contracts.replica import Board, BoardList, Card
from boardmirror.contracts.sync import ResyncReport
from boardmirror.engine.locks import BoardLocks
from boardmirror.engine.progress import ResyncProgress
from boardmirror.engine.reconcile import merge_fields
from boardmirror.store.store import EntityStore

logger = logging.getLogger(__name__)


class ResyncEngine:
    def __init__(
        self,
        store: EntityStore,
        client: RemoteClient,
        *,
        locks: BoardLocks | None = None,
        max_concurrent: int = 1,
        progress: ResyncProgress | None = None,
    ) -> None:
        self._store = store
        self._client = client
        self._locks = locks or BoardLocks()
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._progress = progress or ResyncProgress()

    # ------------------------------------------------------------------
    # Public, per-board serialized operations
    # ------------------------------------------------------------------

    async def sync_lists(self, board_id: str) -> None:
        async with self._locks.hold(board_id):
            await self._sync_lists(board_id)

    async def sync_cards(self, board_id: str, list_id: str) -> None:
        async with self._locks.hold(board_id):
            await self._sync_cards(board_id, list_id)

    async def resync_board(self, board_id: str) -> None:
        """Reconcile list membership, then merge the cards of every list."""
        async with self._locks.hold(board_id):
            if self._store.get_board(board_id) is None:
                remote = await self._client.fetch_board(board_id)
                self._store.save_board(board_id, remote.name, remote.closed)

            await self._sync_lists(board_id)
            board = self._store.get_board(board_id)
            for board_list in board.lists if board is not None else []:
                await self._sync_cards(board_id, board_list.id)
        logger.info("Board resynced: %s", board_id)

    async def refresh_board_data(self, board_id: str) -> Board:
        """Destructively rebuild the board from a single board-level fetch."""
        async with self._locks.hold(board_id):
            remote = await self._client.fetch_board(board_id)
            board = Board(
                id=board_id, name=remote.name, closed=remote.closed, lists=_lists_from_board_payload(remote)
            )
            self._store.replace_board(board)
        logger.info("Board data refreshed: %s", board_id)
        return self._store.require_board(board_id)

    async def sync_all_boards(self) -> ResyncReport:
        """Resync every board in the replica; one board's failure does not stop the others."""
        board_ids = [board.id for board in self._store.boards()]
        report = ResyncReport()
        self._progress.boards_queued(board_ids)

        async def run(board_id: str) -> None:
            async with self._semaphore:
                try:
                    await self.resync_board(board_id)
                except RemoteFetchError as exc:
                    logger.warning("Resync failed for board %s: %s", board_id, exc)
                    report.failures[board_id] = str(exc)
                    self._progress.board_failed(board_id, exc)
                else:
                    report.synced.append(board_id)
                    self._progress.board_synced(board_id)

        try:
            async with asyncio.TaskGroup() as tg:
                for board_id in board_ids:
                    tg.create_task(run(board_id))
        except* BoardMirrorError as errors:
            raise errors.exceptions[0] from None

        report.synced.sort()
        self._progress.finished(report)
        return report

    # ------------------------------------------------------------------
    # Internals (caller holds the board lock)
    # ------------------------------------------------------------------

    async def _sync_lists(self, board_id: str) -> None:
        remote_lists = await self._client.fetch_lists(board_id)
        board = self._store.get_board(board_id)
        if board is None:
            logger.warning("Board %s not found; lists not synced", board_id)
            return

        remote_ids = {remote_list.id for remote_list in remote_lists}
        lists = [board_list for board_list in board.lists if board_list.id in remote_ids]
        known_ids = {board_list.id for board_list in lists}
        for remote_list in remote_lists:
            if remote_list.id in known_ids:
                continue
            lists.append(BoardList(id=remote_list.id, name=remote_list.name, closed=remote_list.closed))
            known_ids.add(remote_list.id)

        removed = [board_list.id for board_list in board.lists if board_list.id not in remote_ids]
        if removed:
            logger.info("Removing lists %s from board %s", ", ".join(removed), board_id)
        self._store.replace_lists(board_id, lists)

    async def _sync_cards(self, board_id: str, list_id: str) -> None:
        remote_cards = await self._client.fetch_cards(list_id)
        if self._store.get_list(board_id, list_id) is None:
            logger.warning("List %s not found on board %s; cards not synced", list_id, board_id)
            return

        for remote_card in remote_cards:
            location = self._store.find_card_anywhere(board_id, remote_card.id)
            if location is None:
                self._store.add_card(board_id, list_id, _card_from_list_payload(remote_card))
            elif location.list_id != list_id:
                self._store.move_card(board_id, remote_card.id, location.list_id, list_id)
            else:
                patched = merge_fields(
                    location.card,
                    {"due_date": remote_card.due, "archived": remote_card.closed},
                    ("due_date", "archived"),
                )
                if patched != location.card:
                    self._store.put_card(board_id, list_id, patched)


def _card_from_list_payload(remote_card: RemoteCard) -> Card:
    return Card(
        id=remote_card.id,
        name=remote_card.name,
        due_date=remote_card.due,
        description=remote_card.desc,
        archived=remote_card.closed,
        start_date=None,
        checklists=[],
    )


def _lists_from_board_payload(remote: RemoteBoard) -> list[BoardList]:
    lists: list[BoardList] = []
    seen_lists: set[str] = set()
    for remote_list in remote.lists:
        if remote_list.id in seen_lists:
            continue
        seen_lists.add(remote_list.id)

        cards: list[Card] = []
        seen_cards: set[str] = set()
        for remote_card in remote_list.cards:
            if remote_card.id in seen_cards:
                continue
            seen_cards.add(remote_card.id)
            cards.append(
                Card(id=remote_card.id, name=remote_card.name, due_date=remote_card.due, description=remote_card.desc)
            )
        lists.append(BoardList(id=remote_list.id, name=remote_list.name, closed=remote_list.closed, cards=cards))
    return lists
