"""Board-level observer for :meth:`ResyncEngine.sync_all_boards`.

The engine reports which boards it is about to resync, the outcome of each
one as it settles, and the final :class:`ResyncReport`. Every hook is a no-op
here, so observers override only what they render.
"""

from __future__ import annotations

from boardmirror.contracts.exceptions import RemoteFetchError
from boardmirror.contracts.sync import ResyncReport


class ResyncProgress:
    def boards_queued(self, board_ids: list[str]) -> None:
        """Called once, before any board is fetched."""

    def board_synced(self, board_id: str) -> None:
        pass

    def board_failed(self, board_id: str, error: RemoteFetchError) -> None:
        """*board_id* was skipped; its replica state is whatever was written before *error*."""

    def finished(self, report: ResyncReport) -> None:
        pass
