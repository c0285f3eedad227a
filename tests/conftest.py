"""Shared test fixtures for boardmirror tests."""

from __future__ import annotations

from typing import Any

import pytest

from boardmirror.contracts.replica import Board, BoardList, Card, CheckItem, Checklist, ReplicaDocument
from boardmirror.store import EntityStore, InMemoryBackend
from tests.fakes.remote import FakeRemoteClient


@pytest.fixture
def sample_board() -> Board:
    """Board ``b1`` with lists L1 (cards c1, c2) and L2 (card c3)."""
    return Board(
        id="b1",
        name="Roadmap",
        lists=[
            BoardList(
                id="L1",
                name="To Do",
                cards=[
                    Card(
                        id="c1",
                        name="Write docs",
                        due_date="2024-05-01T12:00:00.000Z",
                        start_date="2024-04-01T09:00:00.000Z",
                        description="Outline first",
                        checklists=[
                            Checklist(
                                id="cl1",
                                name="Steps",
                                items=[CheckItem(id="ci1", name="Draft"), CheckItem(id="ci2", name="Review")],
                            )
                        ],
                    ),
                    Card(id="c2", name="Fix bug"),
                ],
            ),
            BoardList(id="L2", name="Done", cards=[Card(id="c3", name="Ship it")]),
        ],
    )


@pytest.fixture
def backend(sample_board: Board) -> InMemoryBackend:
    return InMemoryBackend(ReplicaDocument(last_edited_board_id="b1", boards={"b1": sample_board}))


@pytest.fixture
def store(backend: InMemoryBackend) -> EntityStore:
    return EntityStore(backend)


@pytest.fixture
def empty_store() -> EntityStore:
    return EntityStore(InMemoryBackend())


@pytest.fixture
def remote_payload() -> dict[str, dict[str, Any]]:
    return {
        "b1": {
            "name": "Roadmap",
            "lists": [
                {
                    "id": "L1",
                    "name": "To Do",
                    "cards": [
                        {"id": "c1", "name": "Write docs", "due": "2024-05-01T12:00:00.000Z", "desc": "Outline first"},
                        {"id": "c2", "name": "Fix bug"},
                    ],
                },
                {"id": "L2", "name": "Done", "cards": [{"id": "c3", "name": "Ship it"}]},
            ],
        }
    }


@pytest.fixture
def remote(remote_payload: dict[str, dict[str, Any]]) -> FakeRemoteClient:
    return FakeRemoteClient.from_payload(remote_payload)
