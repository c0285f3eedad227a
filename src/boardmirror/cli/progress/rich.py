"""Rich-based resync progress display."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from boardmirror.contracts.exceptions import RemoteFetchError
from boardmirror.contracts.sync import ResyncReport
from boardmirror.engine.progress import ResyncProgress


class RichResyncProgress(ResyncProgress):
    """Live per-board progress bar on stderr.

    Each failed board is printed above the bar as it happens. Use as a context
    manager so the live display is started and stopped::

        with RichResyncProgress() as progress:
            report = await engine.sync_all_boards()
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>14}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self._console,
            transient=False,
        )
        self._task_id: RichTaskID | None = None
        self.failed: list[str] = []

    def __enter__(self) -> RichResyncProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def boards_queued(self, board_ids: list[str]) -> None:
        self._task_id = self._progress.add_task("[cyan]Resync[/]", total=len(board_ids))

    def board_synced(self, board_id: str) -> None:
        if self._task_id is not None:
            self._progress.advance(self._task_id)

    def board_failed(self, board_id: str, error: RemoteFetchError) -> None:
        self.failed.append(board_id)
        self._progress.console.print(f"[red]✗[/red] {escape(board_id)}: {escape(str(error))}")
        if self._task_id is not None:
            self._progress.update(self._task_id, advance=1, description=f"[red]Resync ({len(self.failed)} failed)[/]")

    def finished(self, report: ResyncReport) -> None:
        if self._task_id is None:
            return
        total = len(report.synced) + len(report.failures)
        self._progress.update(self._task_id, total=total, completed=total)
