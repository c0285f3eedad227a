"""Public API surface for boardmirror."""

from boardmirror.contracts.config import MirrorConfig
from boardmirror.contracts.events import EventKind, WebhookEvent
from boardmirror.contracts.exceptions import (
    AuthenticationError,
    BoardMirrorError,
    ConfigError,
    MalformedEventError,
    NotFoundError,
    PersistenceError,
    RemoteFetchError,
)
from boardmirror.contracts.remote import RemoteClient
from boardmirror.contracts.replica import Board, BoardList, Card, CheckItem, CheckItemState, Checklist, ReplicaDocument
from boardmirror.contracts.sync import ApplyOutcome, ResyncReport
from boardmirror.engine import DeltaApplier, ResyncEngine, merge_fields, parse_event
from boardmirror.providers import TrelloClient, create_remote_client
from boardmirror.sdk import BoardMirror, load_config
from boardmirror.store import EntityStore, InMemoryBackend, JsonFileBackend, PersistenceBackend

__all__ = [
    "ApplyOutcome",
    "AuthenticationError",
    "Board",
    "BoardList",
    "BoardMirror",
    "BoardMirrorError",
    "Card",
    "CheckItem",
    "CheckItemState",
    "Checklist",
    "ConfigError",
    "DeltaApplier",
    "EntityStore",
    "EventKind",
    "InMemoryBackend",
    "JsonFileBackend",
    "MalformedEventError",
    "MirrorConfig",
    "NotFoundError",
    "PersistenceBackend",
    "PersistenceError",
    "RemoteClient",
    "RemoteFetchError",
    "ReplicaDocument",
    "ResyncEngine",
    "ResyncReport",
    "TrelloClient",
    "WebhookEvent",
    "create_remote_client",
    "load_config",
    "merge_fields",
    "parse_event",
]
