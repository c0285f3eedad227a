"""Shared CLI helpers."""

from __future__ import annotations

import argparse
from pathlib import Path

from boardmirror.config import load_config
from boardmirror.contracts.config import MirrorConfig
from boardmirror.engine.progress import ResyncProgress
from boardmirror.sdk import BoardMirror

DEFAULT_STORE = "boards.json"


def resolve_config(args: argparse.Namespace) -> MirrorConfig:
    """Load ``--config`` when given, else default to env auth; ``--store`` wins over both."""
    config = load_config(args.config) if args.config else MirrorConfig(store_path=Path(DEFAULT_STORE))
    if args.store:
        config = config.model_copy(update={"store_path": Path(args.store)})
    return config


def build_mirror(args: argparse.Namespace, *, progress: ResyncProgress | None = None) -> BoardMirror:
    return BoardMirror.from_config(resolve_config(args), progress=progress)


def plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"
