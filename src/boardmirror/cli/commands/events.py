"""apply-events command."""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from pathlib import Path
from typing import Any

from boardmirror.cli.common import build_mirror
from boardmirror.contracts.exceptions import ConfigError, MalformedEventError
from boardmirror.contracts.sync import ApplyOutcome


def read_actions(source: str) -> list[dict[str, Any]]:
    """Read one action or an array of actions from *source* (``-`` is stdin)."""
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed reading events file: {source}") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedEventError(f"events file is not valid JSON: {source}") from exc

    actions = payload if isinstance(payload, list) else [payload]
    for position, action in enumerate(actions):
        if not isinstance(action, dict):
            raise MalformedEventError(f"event #{position} is not a JSON object")
    return actions


def format_outcomes(outcomes: list[ApplyOutcome]) -> str:
    counts = Counter(outcomes)
    return (
        f"{len(outcomes)} events: {counts[ApplyOutcome.APPLIED]} applied, "
        f"{counts[ApplyOutcome.NOOP]} unchanged, {counts[ApplyOutcome.DROPPED]} dropped"
    )


async def run_apply_events(args: argparse.Namespace) -> int:
    actions = read_actions(args.file)
    async with build_mirror(args) as mirror:
        outcomes = await mirror.apply_events(actions)
    print(format_outcomes(outcomes))
    return 0


__all__ = ["format_outcomes", "read_actions", "run_apply_events"]
