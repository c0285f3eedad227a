"""Result contracts returned by the sync engines."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class ApplyOutcome(StrEnum):
    APPLIED = "applied"
    NOOP = "noop"
    DROPPED = "dropped"


class ResyncReport(BaseModel):
    synced: list[str] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures
