"""Persistence backends for the replica document."""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from boardmirror.contracts.exceptions import PersistenceError
from boardmirror.contracts.replica import ReplicaDocument

logger = logging.getLogger(__name__)

_DEFAULT_MODE = 0o644


class PersistenceBackend(ABC):
    """Loads and saves the whole replica document as one unit."""

    @abstractmethod
    def load(self) -> ReplicaDocument:
        """Return the persisted document, or an empty one if nothing was saved yet."""

    @abstractmethod
    def save(self, document: ReplicaDocument) -> None:
        """Persist *document*, replacing whatever was stored before."""


class InMemoryBackend(PersistenceBackend):
    def __init__(self, document: ReplicaDocument | None = None) -> None:
        self._document = (document or ReplicaDocument()).model_copy(deep=True)
        self.saves = 0

    def load(self) -> ReplicaDocument:
        return self._document.model_copy(deep=True)

    def save(self, document: ReplicaDocument) -> None:
        self._document = document.model_copy(deep=True)
        self.saves += 1


class JsonFileBackend(PersistenceBackend):
    """Pretty-printed JSON document on disk, in the camelCase interop shape.

    Writes go to a temporary file in the same directory and are moved into
    place with :func:`os.replace`, so readers never observe a half-written file.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ReplicaDocument:
        if not self._path.exists():
            logger.debug("Replica file %s not found; starting empty", self._path)
            return ReplicaDocument()
        try:
            payload: Any = json.loads(self._path.read_text(encoding="utf-8"))
            return ReplicaDocument.model_validate(payload)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise PersistenceError(f"invalid replica file: {self._path}") from exc

    def save(self, document: ReplicaDocument) -> None:
        payload = document.model_dump_json(by_alias=True, indent=2)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.chmod(tmp_name, self._file_mode())
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"failed to persist replica: {self._path}") from exc

    def _file_mode(self) -> int:
        """Permission bits for the next write: the current file's, else 0644."""
        try:
            return stat.S_IMODE(self._path.stat().st_mode)
        except FileNotFoundError:
            return _DEFAULT_MODE
