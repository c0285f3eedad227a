"""Replica synchronization engines."""

from boardmirror.engine.delta import DeltaApplier
from boardmirror.engine.events import parse_event
from boardmirror.engine.locks import BoardLocks
from boardmirror.engine.progress import ResyncProgress
from boardmirror.engine.reconcile import merge_fields, present_fields
from boardmirror.engine.resync import ResyncEngine

__all__ = [
    "BoardLocks",
    "DeltaApplier",
    "ResyncEngine",
    "ResyncProgress",
    "merge_fields",
    "parse_event",
    "present_fields",
]
