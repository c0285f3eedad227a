"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("boardmirror")
    except PackageNotFoundError:
        return "0.0.0"


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=None, help="Path to a boardmirror JSON config file")
    parser.add_argument("--store", default=None, help="Replica file path (overrides the config's store_path)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="boardmirror")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    resync_parser = subparsers.add_parser("resync", help="Reconcile a board's lists and merge its cards")
    resync_parser.add_argument("board_id", help="Remote board ID")
    _add_common_options(resync_parser)

    refresh_parser = subparsers.add_parser(
        "refresh", help="Rebuild a board from a single board fetch (drops local-only card data)"
    )
    refresh_parser.add_argument("board_id", help="Remote board ID")
    _add_common_options(refresh_parser)

    cards_parser = subparsers.add_parser("sync-cards", help="Merge the cards of one list")
    cards_parser.add_argument("board_id", help="Remote board ID")
    cards_parser.add_argument("list_id", help="Remote list ID")
    _add_common_options(cards_parser)

    all_parser = subparsers.add_parser("sync-all", help="Resync every board in the replica")
    _add_common_options(all_parser)

    events_parser = subparsers.add_parser("apply-events", help="Apply webhook actions from a JSON file")
    events_parser.add_argument("file", help="JSON object or array of webhook actions ('-' reads stdin)")
    _add_common_options(events_parser)

    show_parser = subparsers.add_parser("show", help="Print the replica as a tree")
    show_parser.add_argument("board_id", nargs="?", default=None, help="Only show this board")
    _add_common_options(show_parser)

    return parser


__all__ = ["build_parser"]
