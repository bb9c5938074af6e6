from __future__ import annotations

import threading

import structlog

from .record import ExecutionRecord
from .types import Clock, DuplicateExecutionIdError, ExecutionNotFoundError, utcnow

logger = structlog.get_logger()


class ExecutionStore:
    """
    Process-wide registry of execution records.

    Records are never removed: the store grows by one record per execution
    for the lifetime of the process.
    """

    def __init__(self, *, clock: Clock = utcnow):
        self._clock = clock
        self._records: dict[str, ExecutionRecord] = {}
        self._lock = threading.Lock()

    def create(self, execution_id: str) -> ExecutionRecord:
        with self._lock:
            if execution_id in self._records:
                raise DuplicateExecutionIdError(execution_id)

            record = ExecutionRecord(execution_id, clock=self._clock)
            self._records[execution_id] = record

        logger.debug("execution_created", execution_id=execution_id)
        return record

    def get(self, execution_id: str) -> ExecutionRecord:
        with self._lock:
            record = self._records.get(execution_id)

        if record is None:
            raise ExecutionNotFoundError(execution_id)

        return record

    def list(self) -> list[ExecutionRecord]:
        with self._lock:
            return list(self._records.values())

    def __contains__(self, execution_id: object) -> bool:
        with self._lock:
            return execution_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
