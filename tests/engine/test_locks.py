import asyncio

import pytest

from boardmirror.engine.locks import BoardLocks


def test_lock_for_returns_one_lock_per_board() -> None:
    locks = BoardLocks()

    assert locks.lock_for("b1") is locks.lock_for("b1")
    assert locks.lock_for("b1") is not locks.lock_for("b2")


@pytest.mark.asyncio
async def test_hold_serializes_same_board_only() -> None:
    locks = BoardLocks()
    trace: list[str] = []

    async def work(board_id: str, tag: str) -> None:
        async with locks.hold(board_id):
            trace.append(f"{tag}:start")
            await asyncio.sleep(0)
            trace.append(f"{tag}:end")

    await asyncio.gather(work("b1", "a"), work("b1", "b"), work("b2", "c"))

    assert trace.index("a:end") < trace.index("b:start")
    assert trace.index("c:start") < trace.index("a:end")
