"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from boardmirror.cli.commands.events import run_apply_events
from boardmirror.cli.commands.resync import run_refresh, run_resync, run_sync_all, run_sync_cards
from boardmirror.cli.commands.show import run_show
from boardmirror.cli.parser import build_parser
from boardmirror.contracts.exceptions import (
    ConfigError,
    MalformedEventError,
    NotFoundError,
    PersistenceError,
    RemoteFetchError,
)

_ASYNC_COMMANDS = {
    "resync": run_resync,
    "refresh": run_refresh,
    "sync-cards": run_sync_cards,
    "sync-all": run_sync_all,
    "apply-events": run_apply_events,
}


def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "show":
        return run_show(args)
    return asyncio.run(_ASYNC_COMMANDS[args.command](args))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)
    else:
        logging.basicConfig(level=logging.WARNING, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        return _dispatch(args)
    except (ConfigError, PersistenceError, NotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except RemoteFetchError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except MalformedEventError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
