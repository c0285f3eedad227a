"""Replica entity store and persistence backends."""

from boardmirror.store.backend import InMemoryBackend, JsonFileBackend, PersistenceBackend
from boardmirror.store.store import EntityStore

__all__ = ["EntityStore", "InMemoryBackend", "JsonFileBackend", "PersistenceBackend"]
