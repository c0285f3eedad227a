"""SDK composition root for boardmirror."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import TracebackType
from typing import Any

from boardmirror.config import load_config
from boardmirror.contracts.config import MirrorConfig
from boardmirror.contracts.events import WebhookEvent
from boardmirror.contracts.remote import RemoteBoard, RemoteCard, RemoteClient, RemoteList
from boardmirror.contracts.replica import Board
from boardmirror.contracts.sync import ApplyOutcome, ResyncReport
from boardmirror.engine import BoardLocks, DeltaApplier, ResyncEngine, ResyncProgress
from boardmirror.providers import create_remote_client
from boardmirror.store import EntityStore, JsonFileBackend

__all__ = ["BoardMirror", "load_config"]


class _LazyRemoteClient(RemoteClient):
    """Resolves credentials and opens the real client on the first fetch.

    Applying events that never need the remote service works without
    credentials this way.
    """

    def __init__(self, config: MirrorConfig) -> None:
        self._config = config
        self._client: RemoteClient | None = None

    async def __aenter__(self) -> _LazyRemoteClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.__aexit__(exc_type, exc_val, exc_tb)
            self._client = None

    async def _open(self) -> RemoteClient:
        if self._client is None:
            client = await create_remote_client(self._config)
            self._client = await client.__aenter__()
        return self._client

    async def fetch_board(self, board_id: str) -> RemoteBoard:
        return await (await self._open()).fetch_board(board_id)

    async def fetch_lists(self, board_id: str) -> list[RemoteList]:
        return await (await self._open()).fetch_lists(board_id)

    async def fetch_cards(self, list_id: str) -> list[RemoteCard]:
        return await (await self._open()).fetch_cards(list_id)


class BoardMirror:
    """boardmirror SDK public API.

    Owns the entity store, both engines and the per-board lock registry they
    share. Use as an async context manager so the remote client is closed::

        async with BoardMirror.from_config(load_config("mirror.json")) as mirror:
            await mirror.resync_board("board1")
    """

    def __init__(
        self,
        *,
        store: EntityStore,
        client: RemoteClient,
        max_concurrent: int = 1,
        progress: ResyncProgress | None = None,
    ) -> None:
        self._store = store
        self._client = client
        self._locks = BoardLocks()
        self._resync = ResyncEngine(
            store, client, locks=self._locks, max_concurrent=max_concurrent, progress=progress
        )
        self._delta = DeltaApplier(store, resync=self._resync, locks=self._locks)

    @classmethod
    def from_config(
        cls,
        config: MirrorConfig,
        *,
        client: RemoteClient | None = None,
        progress: ResyncProgress | None = None,
    ) -> BoardMirror:
        store = EntityStore(JsonFileBackend(config.store_path))
        return cls(
            store=store,
            client=client or _LazyRemoteClient(config),
            max_concurrent=config.max_concurrent,
            progress=progress,
        )

    async def __aenter__(self) -> BoardMirror:
        await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self._client.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def store(self) -> EntityStore:
        return self._store

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def board(self, board_id: str) -> Board | None:
        return self._store.get_board(board_id)

    def boards(self) -> list[Board]:
        return self._store.boards()

    def last_edited_board(self) -> Board | None:
        return self._store.last_edited_board()

    # ------------------------------------------------------------------
    # Push channel
    # ------------------------------------------------------------------

    async def apply_event(self, event: WebhookEvent | Mapping[str, Any]) -> ApplyOutcome:
        return await self._delta.apply_event(event)

    async def apply_events(self, events: Iterable[WebhookEvent | Mapping[str, Any]]) -> list[ApplyOutcome]:
        return await self._delta.apply_events(events)

    # ------------------------------------------------------------------
    # Pull channel
    # ------------------------------------------------------------------

    async def resync_board(self, board_id: str) -> None:
        await self._resync.resync_board(board_id)

    async def refresh_board_data(self, board_id: str) -> Board:
        return await self._resync.refresh_board_data(board_id)

    async def sync_lists(self, board_id: str) -> None:
        await self._resync.sync_lists(board_id)

    async def sync_cards(self, board_id: str, list_id: str) -> None:
        await self._resync.sync_cards(board_id, list_id)

    async def sync_all_boards(self) -> ResyncReport:
        return await self._resync.sync_all_boards()
