"""Entity store over the replica document.

The store is the only code that touches the replica graph. Reads return deep
copies; every mutator works on a copy of the whole document, persists it
through the backend and only then makes it the current snapshot, so a failed
write leaves the previous state intact.

A missing ancestor (board, list) is reported by a ``False``/``None`` return
and a warning; the store never fabricates ancestors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from boardmirror.contracts.exceptions import NotFoundError
from boardmirror.contracts.replica import Board, BoardList, Card, CardLocation, ReplicaDocument
from boardmirror.store.backend import PersistenceBackend

logger = logging.getLogger(__name__)


class EntityStore:
    def __init__(self, backend: PersistenceBackend) -> None:
        self._backend = backend
        self._document: ReplicaDocument | None = None
        # board id -> card id -> owning list id; local cache only
        self._card_index: dict[str, dict[str, str]] = {}

    # ------------------------------------------------------------------
    # Snapshot management
    # ------------------------------------------------------------------

    def _current(self) -> ReplicaDocument:
        if self._document is None:
            self._document = self._backend.load()
            self._rebuild_index()
        return self._document

    def reload(self) -> None:
        """Drop the cached snapshot; the next access reads the backend again."""
        self._document = None
        self._card_index = {}

    @contextmanager
    def _transaction(self) -> Iterator[ReplicaDocument]:
        working = self._current().model_copy(deep=True)
        yield working
        self._backend.save(working)
        self._document = working
        self._rebuild_index()

    def _rebuild_index(self) -> None:
        index: dict[str, dict[str, str]] = {}
        for board_id, board in self._current().boards.items():
            board_index: dict[str, str] = {}
            for board_list in board.lists:
                for card in board_list.cards:
                    owner = board_index.setdefault(card.id, board_list.id)
                    if owner != board_list.id:
                        logger.warning(
                            "Card %s appears in lists %s and %s on board %s", card.id, owner, board_list.id, board_id
                        )
            index[board_id] = board_index
        self._card_index = index

    def document(self) -> ReplicaDocument:
        return self._current().model_copy(deep=True)

    # ------------------------------------------------------------------
    # Boards
    # ------------------------------------------------------------------

    def boards(self) -> list[Board]:
        return [board.model_copy(deep=True) for board in self._current().boards.values()]

    def get_board(self, board_id: str) -> Board | None:
        board = self._current().boards.get(board_id)
        return board.model_copy(deep=True) if board is not None else None

    def require_board(self, board_id: str) -> Board:
        board = self.get_board(board_id)
        if board is None:
            raise NotFoundError(f"Board not found: {board_id}")
        return board

    def save_board(self, board_id: str, name: str, closed: bool = False) -> Board:
        """Create (or reset) *board_id* as an empty board and mark it last edited."""
        board = Board(id=board_id, name=name, closed=closed)
        with self._transaction() as document:
            document.boards[board_id] = board
            document.last_edited_board_id = board_id
        logger.info("Board saved: %s - %s (closed=%s)", board_id, name, closed)
        return board.model_copy(deep=True)

    def replace_board(self, board: Board) -> None:
        """Swap in *board* with all its lists and mark it last edited, in one write."""
        with self._transaction() as document:
            document.boards[board.id] = board.model_copy(deep=True)
            document.last_edited_board_id = board.id
        logger.info("Board replaced: %s (%d lists)", board.id, len(board.lists))

    def upsert_board(self, board: Board) -> None:
        with self._transaction() as document:
            document.boards[board.id] = board.model_copy(deep=True)

    def delete_board(self, board_id: str) -> bool:
        if board_id not in self._current().boards:
            logger.info("Board not in replica: %s", board_id)
            return False
        with self._transaction() as document:
            del document.boards[board_id]
            if document.last_edited_board_id == board_id:
                document.last_edited_board_id = None
        logger.info("Board deleted: %s", board_id)
        return True

    def last_edited_board(self) -> Board | None:
        board_id = self._current().last_edited_board_id
        if board_id is None:
            return None
        return self.get_board(board_id)

    def set_last_edited(self, board_id: str) -> bool:
        if board_id not in self._current().boards:
            logger.warning("Cannot mark missing board as last edited: %s", board_id)
            return False
        with self._transaction() as document:
            document.last_edited_board_id = board_id
        return True

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def get_list(self, board_id: str, list_id: str) -> BoardList | None:
        board = self._current().boards.get(board_id)
        if board is None:
            return None
        board_list = board.find_list(list_id)
        return board_list.model_copy(deep=True) if board_list is not None else None

    def add_list(self, board_id: str, board_list: BoardList) -> bool:
        board = self._current().boards.get(board_id)
        if board is None:
            logger.warning("Board %s not found; list %s not added", board_id, board_list.id)
            return False
        if board.find_list(board_list.id) is not None:
            logger.debug("List %s already exists on board %s", board_list.id, board_id)
            return False
        with self._transaction() as document:
            document.boards[board_id].lists.append(board_list.model_copy(deep=True))
        logger.info("Added list %s (%s) to board %s", board_list.name, board_list.id, board_id)
        return True

    def put_list(self, board_id: str, board_list: BoardList) -> bool:
        """Replace the stored list that has ``board_list.id`` with *board_list*."""
        if self.get_list(board_id, board_list.id) is None:
            logger.warning("List %s not found on board %s", board_list.id, board_id)
            return False
        with self._transaction() as document:
            lists = document.boards[board_id].lists
            position = next(i for i, candidate in enumerate(lists) if candidate.id == board_list.id)
            lists[position] = board_list.model_copy(deep=True)
        return True

    def replace_lists(self, board_id: str, lists: list[BoardList]) -> bool:
        if board_id not in self._current().boards:
            logger.warning("Board %s not found; lists not replaced", board_id)
            return False
        with self._transaction() as document:
            document.boards[board_id].lists = [board_list.model_copy(deep=True) for board_list in lists]
        return True

    def delete_list(self, board_id: str, list_id: str) -> bool:
        if self.get_list(board_id, list_id) is None:
            logger.warning("List %s not found on board %s", list_id, board_id)
            return False
        with self._transaction() as document:
            board = document.boards[board_id]
            board.lists = [board_list for board_list in board.lists if board_list.id != list_id]
        logger.info("Deleted list %s from board %s", list_id, board_id)
        return True

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def get_card(self, board_id: str, list_id: str, card_id: str) -> Card | None:
        board_list = self.get_list(board_id, list_id)
        if board_list is None:
            return None
        return board_list.find_card(card_id)

    def add_card(self, board_id: str, list_id: str, card: Card) -> bool:
        """Append *card* to the list unless a card with that id is already there."""
        board_list = self.get_list(board_id, list_id)
        if board_list is None:
            logger.warning("List %s not found on board %s; card %s not added", list_id, board_id, card.id)
            return False
        if board_list.find_card(card.id) is not None:
            logger.debug("Card %s already exists in list %s", card.id, list_id)
            return False
        with self._transaction() as document:
            target = document.boards[board_id].find_list(list_id)
            assert target is not None
            target.cards.append(card.model_copy(deep=True))
        logger.info("Added card %s to list %s", card.id, list_id)
        return True

    def put_card(self, board_id: str, list_id: str, card: Card) -> bool:
        """Write the whole record of an existing card in place."""
        if self.get_card(board_id, list_id, card.id) is None:
            logger.warning("Card %s not found in list %s of board %s", card.id, list_id, board_id)
            return False
        with self._transaction() as document:
            target = document.boards[board_id].find_list(list_id)
            assert target is not None
            position = next(i for i, candidate in enumerate(target.cards) if candidate.id == card.id)
            target.cards[position] = card.model_copy(deep=True)
        return True

    def delete_card(self, board_id: str, list_id: str, card_id: str) -> bool:
        if self.get_card(board_id, list_id, card_id) is None:
            logger.info("Card %s not present in list %s of board %s", card_id, list_id, board_id)
            return False
        with self._transaction() as document:
            target = document.boards[board_id].find_list(list_id)
            assert target is not None
            target.cards = [card for card in target.cards if card.id != card_id]
        logger.info("Deleted card %s from list %s", card_id, list_id)
        return True

    def move_card(self, board_id: str, card_id: str, from_list_id: str, to_list_id: str) -> bool:
        """Relocate a card between two lists of one board in a single write."""
        source = self.get_list(board_id, from_list_id)
        destination = self.get_list(board_id, to_list_id)
        if source is None or destination is None:
            logger.warning(
                "One or both lists not found on board %s. Old list: %s, new list: %s",
                board_id,
                from_list_id,
                to_list_id,
            )
            return False
        if source.find_card(card_id) is None:
            logger.warning("Card %s not found in list %s", card_id, from_list_id)
            return False
        with self._transaction() as document:
            board = document.boards[board_id]
            old_list = board.find_list(from_list_id)
            new_list = board.find_list(to_list_id)
            assert old_list is not None and new_list is not None
            position = next(i for i, candidate in enumerate(old_list.cards) if candidate.id == card_id)
            moved = old_list.cards.pop(position)
            new_list.cards = [card for card in new_list.cards if card.id != card_id]
            new_list.cards.append(moved)
        logger.info("Moved card %s from list %s to %s", card_id, from_list_id, to_list_id)
        return True

    def find_card_anywhere(self, board_id: str, card_id: str) -> CardLocation | None:
        """Locate a card on any list of the board; first match in list order wins."""
        board = self._current().boards.get(board_id)
        if board is None:
            return None

        hinted_list_id = self._card_index.get(board_id, {}).get(card_id)
        if hinted_list_id is not None:
            hinted_list = board.find_list(hinted_list_id)
            card = hinted_list.find_card(card_id) if hinted_list is not None else None
            if card is not None:
                return CardLocation(card=card.model_copy(deep=True), list_id=hinted_list_id)

        for board_list in board.lists:
            card = board_list.find_card(card_id)
            if card is not None:
                return CardLocation(card=card.model_copy(deep=True), list_id=board_list.id)
        return None
