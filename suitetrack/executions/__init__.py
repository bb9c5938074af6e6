from .record import ExecutionRecord
from .store import ExecutionStore
from .types import (
    DuplicateExecutionIdError,
    ExecutionFailure,
    ExecutionNotFoundError,
    ExecutionSnapshot,
    ExecutionState,
    ExecutionStateError,
    Outcome,
    TestResult,
    TrackerError,
)

__all__ = [
    "ExecutionRecord",
    "ExecutionStore",
    "ExecutionSnapshot",
    "ExecutionState",
    "Outcome",
    "TestResult",
    "TrackerError",
    "ExecutionNotFoundError",
    "DuplicateExecutionIdError",
    "ExecutionStateError",
    "ExecutionFailure",
]
