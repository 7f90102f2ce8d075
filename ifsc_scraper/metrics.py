"""
Run summary for a pipeline execution.

Collects per-stage counts so a data refresh can be compared with the
previous one at a glance.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class RunStatus(str, Enum):
    """Outcome of a pipeline run."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class RunSummary:
    """Counts for a single pipeline run."""

    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ended_at: Optional[datetime] = None
    status: RunStatus = RunStatus.SUCCESS

    # Source name -> records parsed
    source_records: Dict[str, int] = field(default_factory=dict)
    # Source name -> rows dropped / duplicates discarded
    source_dropped: Dict[str, int] = field(default_factory=dict)
    source_duplicates: Dict[str, int] = field(default_factory=dict)

    merged_records: int = 0
    bank_patches_applied: int = 0
    patches_applied: int = 0
    records_exported: int = 0

    error: Optional[str] = None

    @property
    def duration_seconds(self) -> float:
        if not self.ended_at:
            return 0.0
        return (self.ended_at - self.started_at).total_seconds()

    def finish(self, status: RunStatus = RunStatus.SUCCESS, error: Optional[str] = None) -> None:
        self.ended_at = datetime.now(timezone.utc)
        self.status = status
        self.error = error

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        data = asdict(self)
        data["started_at"] = self.started_at.isoformat()
        data["ended_at"] = self.ended_at.isoformat() if self.ended_at else None
        data["status"] = self.status.value
        data["duration_seconds"] = round(self.duration_seconds, 2)
        return data
