"""Pull-channel commands: resync, refresh, sync-cards and sync-all."""

from __future__ import annotations

import argparse

from boardmirror.cli.common import build_mirror, plural
from boardmirror.contracts.replica import Board
from boardmirror.contracts.sync import ResyncReport


def format_board_summary(board: Board) -> str:
    cards = sum(len(board_list.cards) for board_list in board.lists)
    return f"{board.id}  {board.name}: {plural(len(board.lists), 'list')}, {plural(cards, 'card')}"


def format_report(report: ResyncReport) -> str:
    lines = ["", "boardmirror - sync-all complete", ""]
    for board_id in report.synced:
        lines.append(f"  ok      {board_id}")
    for board_id, message in sorted(report.failures.items()):
        lines.append(f"  failed  {board_id}: {message}")
    if not report.synced and not report.failures:
        lines.append("  No boards in the replica")
    lines.append("")
    return "\n".join(lines)


async def run_resync(args: argparse.Namespace) -> int:
    async with build_mirror(args) as mirror:
        await mirror.resync_board(args.board_id)
        board = mirror.board(args.board_id)
    if board is not None:
        print(format_board_summary(board))
    return 0


async def run_refresh(args: argparse.Namespace) -> int:
    async with build_mirror(args) as mirror:
        board = await mirror.refresh_board_data(args.board_id)
    print(format_board_summary(board))
    return 0


async def run_sync_cards(args: argparse.Namespace) -> int:
    async with build_mirror(args) as mirror:
        await mirror.sync_cards(args.board_id, args.list_id)
        board = mirror.board(args.board_id)
    board_list = board.find_list(args.list_id) if board is not None else None
    if board_list is not None:
        print(f"{board_list.id}  {board_list.name}: {plural(len(board_list.cards), 'card')}")
    return 0


async def run_sync_all(args: argparse.Namespace) -> int:
    if args.verbose:
        async with build_mirror(args) as mirror:
            report = await mirror.sync_all_boards()
    else:
        from boardmirror.cli.progress.rich import RichResyncProgress

        with RichResyncProgress() as progress:
            async with build_mirror(args, progress=progress) as mirror:
                report = await mirror.sync_all_boards()

    print(format_report(report))
    return 0 if report.ok else 4


__all__ = ["format_board_summary", "format_report", "run_refresh", "run_resync", "run_sync_all", "run_sync_cards"]
