from __future__ import annotations

import threading
from datetime import datetime

from .types import (
    Clock,
    ExecutionSnapshot,
    ExecutionState,
    ExecutionStateError,
    TestResult,
    utcnow,
)


class ExecutionRecord:
    """
    Live state of one execution.

    Only the background task that owns the record writes to it. Every write
    and every snapshot takes the record lock, so readers on other threads
    never see a half-applied transition (state set but end time missing).
    """

    def __init__(self, execution_id: str, *, clock: Clock = utcnow):
        self._lock = threading.Lock()
        self._clock = clock
        self._id = execution_id
        self._state = ExecutionState.RUNNING
        self._results: list[TestResult] = []
        self._output: list[str] = []
        self._start_time = clock()
        self._end_time: datetime | None = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def start_time(self) -> datetime:
        return self._start_time

    @property
    def state(self) -> ExecutionState:
        with self._lock:
            return self._state

    @property
    def end_time(self) -> datetime | None:
        with self._lock:
            return self._end_time

    def now(self) -> datetime:
        # Wall clocks can step backwards; a record's timestamps never do.
        return max(self._clock(), self._start_time)

    def append_output(self, line: str) -> None:
        with self._lock:
            self._require_running("append output")
            self._output.append(line)

    def add_result(self, result: TestResult) -> None:
        with self._lock:
            self._require_running("add a result")
            self._results.append(result)

    def complete(self, line: str) -> None:
        self._finish(ExecutionState.COMPLETED, line)

    def fail(self, line: str) -> None:
        self._finish(ExecutionState.FAILED, line)

    def snapshot(self) -> ExecutionSnapshot:
        with self._lock:
            return ExecutionSnapshot(
                id=self._id,
                state=self._state,
                results=tuple(self._results),
                output=tuple(self._output),
                start_time=self._start_time,
                end_time=self._end_time,
            )

    def _finish(self, state: ExecutionState, line: str) -> None:
        end_time = self.now()
        with self._lock:
            self._require_running(f"move to {state.value}")
            self._state = state
            self._end_time = end_time
            self._output.append(line)

    def _require_running(self, action: str) -> None:
        if self._state.is_terminal:
            raise ExecutionStateError(
                f"Execution {self._id} is {self._state.value}, can't {action}"
            )

    def __repr__(self) -> str:
        return f"ExecutionRecord(id={self._id!r}, state={self.state.value})"
