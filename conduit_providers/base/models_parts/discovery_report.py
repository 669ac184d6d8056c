"""
Discovery report DTO describing the outcome of one discovery pass.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class DiscoveryOutcome(str, Enum):
    """Terminal (or in-progress) state of a discovery pass."""

    RUNNING = "running"
    COMMITTED = "committed"
    STALE = "stale"
    FAILED = "failed"


@dataclass(frozen=True)
class DiscoveryReport:
    """What one discovery pass did.

    Attributes:
        generation: Configuration generation the pass was started under.
        outcome: See :class:`DiscoveryOutcome`. ``STALE`` means the results
            were discarded because a newer configuration superseded them.
        model_count: Number of descriptors built (committed or not).
        error: Failure message for ``FAILED`` passes.
        started_at: UTC start time.
        finished_at: UTC completion time (``None`` while running).
    """

    generation: int
    outcome: DiscoveryOutcome
    started_at: datetime
    model_count: int = 0
    error: Optional[str] = None
    finished_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["outcome"] = self.outcome.value
        data["started_at"] = self.started_at.isoformat()
        data["finished_at"] = self.finished_at.isoformat() if self.finished_at else None
        return data


__all__ = ["DiscoveryOutcome", "DiscoveryReport"]
