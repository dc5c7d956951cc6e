from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RefreshStatus(str, Enum):
    REFRESHED = "refreshed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RefreshOutcome:
    """Result of one fetch, decode, render cycle."""

    status: RefreshStatus
    finished_at: datetime
    added: int = 0
    deleted: int = 0
    error: str | None = None
