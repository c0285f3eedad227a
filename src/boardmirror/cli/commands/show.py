"""show command: render the replica as a Rich tree."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from boardmirror.cli.common import resolve_config
from boardmirror.contracts.replica import Board, Card, CheckItemState
from boardmirror.store import EntityStore, JsonFileBackend


def _card_label(card: Card) -> str:
    label = escape(card.name or card.id)
    if card.due_date:
        label += f" [dim](due {escape(card.due_date)})[/dim]"
    if card.archived:
        label += " [yellow]archived[/yellow]"
    return label


def board_tree(board: Board) -> Tree:
    status = " [red]closed[/red]" if board.closed else ""
    tree = Tree(f"[bold]{escape(board.name or board.id)}[/bold] [dim]{board.id}[/dim]{status}")
    for board_list in board.lists:
        branch = tree.add(f"[cyan]{escape(board_list.name or board_list.id)}[/cyan] [dim]{board_list.id}[/dim]")
        for card in board_list.cards:
            card_branch = branch.add(_card_label(card))
            for checklist in card.checklists:
                checklist_branch = card_branch.add(f"[magenta]{escape(checklist.name or checklist.id)}[/magenta]")
                for item in checklist.items:
                    mark = "x" if item.state == CheckItemState.COMPLETE else " "
                    checklist_branch.add(f"\\[{mark}] {escape(item.name)}")
    return tree


def run_show(args: argparse.Namespace) -> int:
    store = EntityStore(JsonFileBackend(resolve_config(args).store_path))
    console = Console()
    if args.board_id is not None:
        console.print(board_tree(store.require_board(args.board_id)))
        return 0

    boards = store.boards()
    if not boards:
        console.print("No boards in the replica")
        return 0
    last_edited = store.document().last_edited_board_id
    for board in boards:
        if board.id == last_edited:
            console.print("[dim]last edited[/dim]")
        console.print(board_tree(board))
    return 0


__all__ = ["board_tree", "run_show"]
