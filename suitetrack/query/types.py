from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from suitetrack.executions.types import ExecutionState, TrackerError


@dataclass(frozen=True)
class StatusSummary:
    id: str
    state: ExecutionState
    start_time: datetime
    end_time: datetime | None
    total_results: int
    passed: int
    failed: int
    skipped: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "executionId": self.id,
            "status": self.state.value,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat() if self.end_time else None,
            "totalTests": self.total_results,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
        }


@dataclass(frozen=True)
class CatalogInfo:
    groups: dict[str, tuple[str, ...]]
    total_groups: int
    total_subjects: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "testClasses": {group: list(names) for group, names in self.groups.items()},
            "totalClasses": self.total_groups,
            "totalMethods": self.total_subjects,
        }


class ExecutionTimeoutError(TrackerError):
    def __init__(self, execution_id: str, timeout: float):
        super().__init__(
            f"Execution {execution_id} still running after {timeout:.1f}s"
        )
        self.execution_id = execution_id
        self.timeout = timeout
