"""Remote-service contracts: records returned by the remote API and the client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from pydantic import BaseModel, Field


class RemoteCard(BaseModel):
    id: str
    name: str = ""
    due: str | None = None
    desc: str = ""
    closed: bool = False


class RemoteList(BaseModel):
    id: str
    name: str = ""
    closed: bool = False
    cards: list[RemoteCard] = Field(default_factory=list)


class RemoteBoard(BaseModel):
    id: str
    name: str = ""
    closed: bool = False
    lists: list[RemoteList] = Field(default_factory=list)


class RemoteClient(ABC):
    """Read-only view of the remote service used by the resync engine.

    Implementations raise :class:`~boardmirror.contracts.exceptions.RemoteFetchError`
    on non-2xx responses or payloads that do not match the records above.
    """

    @abstractmethod
    async def __aenter__(self) -> RemoteClient: ...

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...

    @abstractmethod
    async def fetch_board(self, board_id: str) -> RemoteBoard: ...

    @abstractmethod
    async def fetch_lists(self, board_id: str) -> list[RemoteList]: ...

    @abstractmethod
    async def fetch_cards(self, list_id: str) -> list[RemoteCard]: ...
