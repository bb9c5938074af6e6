from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class ExecutionState(str, Enum):
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self is not ExecutionState.RUNNING


class Outcome(str, Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class TestResult:
    __test__ = False  # keep pytest from collecting this as a test class

    group: str
    name: str
    outcome: Outcome
    message: str
    duration_ms: int
    recorded_at: datetime
    stack_trace: str | None = None

    def __post_init__(self) -> None:
        if self.duration_ms < 0:
            raise ValueError(f"duration_ms can't be negative: {self.duration_ms}")

    @property
    def subject(self) -> str:
        if not self.group or self.group == self.name:
            return self.name
        return f"{self.group}.{self.name}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "group": self.group,
            "name": self.name,
            "outcome": self.outcome.value,
            "message": self.message,
            "durationMillis": self.duration_ms,
            "recordedAt": _iso(self.recorded_at),
            "stackTrace": self.stack_trace,
        }


@dataclass(frozen=True)
class ExecutionSnapshot:
    """Immutable view of an execution record at one point in time."""

    id: str
    state: ExecutionState
    results: tuple[TestResult, ...]
    output: tuple[str, ...]
    start_time: datetime
    end_time: datetime | None

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    def count(self, outcome: Outcome) -> int:
        return sum(1 for result in self.results if result.outcome is outcome)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "state": self.state.value,
            "startTime": _iso(self.start_time),
            "endTime": _iso(self.end_time),
            "results": [result.to_dict() for result in self.results],
            "output": list(self.output),
        }


class TrackerError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class ExecutionNotFoundError(TrackerError):
    def __init__(self, execution_id: str):
        super().__init__(f"Execution not found: {execution_id}")
        self.execution_id = execution_id


class DuplicateExecutionIdError(TrackerError):
    def __init__(self, execution_id: str):
        super().__init__(f"Execution id already exists: {execution_id}")
        self.execution_id = execution_id


class ExecutionStateError(TrackerError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class ExecutionFailure(TrackerError):
    """Raised by work running inside an execution; recorded, never re-raised."""

    def __init__(self, *args: object) -> None:
        super().__init__(*args)
