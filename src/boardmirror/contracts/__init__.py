"""Public contracts for boardmirror."""

from boardmirror.contracts.config import MirrorConfig
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
from boardmirror.contracts.exceptions import (
    AuthenticationError,
    BoardMirrorError,
    ConfigError,
    MalformedEventError,
    NotFoundError,
    PersistenceError,
    RemoteFetchError,
)
from boardmirror.contracts.remote import RemoteBoard, RemoteCard, RemoteClient, RemoteList
from boardmirror.contracts.replica import (
    Board,
    BoardList,
    Card,
    CardLocation,
    CheckItem,
    CheckItemState,
    Checklist,
    ReplicaDocument,
)
from boardmirror.contracts.sync import ApplyOutcome, ResyncReport

__all__ = [
    "ApplyOutcome",
    "AuthenticationError",
    "Board",
    "BoardEvent",
    "BoardList",
    "BoardMirrorError",
    "Card",
    "CardEvent",
    "CardLocation",
    "CheckItem",
    "CheckItemEvent",
    "CheckItemState",
    "Checklist",
    "ChecklistEvent",
    "ConfigError",
    "EventKind",
    "ListEvent",
    "MalformedEventError",
    "MirrorConfig",
    "NotFoundError",
    "PersistenceError",
    "RemoteBoard",
    "RemoteCard",
    "RemoteClient",
    "RemoteFetchError",
    "RemoteList",
    "ReplicaDocument",
    "ResyncReport",
    "UnsupportedEvent",
    "WebhookEvent",
]
