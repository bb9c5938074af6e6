from __future__ import annotations

import time
from typing import Callable

from suitetrack.config import CatalogConfig
from suitetrack.executions import ExecutionSnapshot, ExecutionStore, Outcome

from .types import CatalogInfo, ExecutionTimeoutError, StatusSummary


class QueryService:
    """Read-only views over the store; callers only ever get snapshots."""

    def __init__(self, store: ExecutionStore, catalog: CatalogConfig):
        self.store = store
        self.catalog = catalog

    def get_execution(self, execution_id: str) -> ExecutionSnapshot:
        return self.store.get(execution_id).snapshot()

    def list_executions(self) -> list[ExecutionSnapshot]:
        return [record.snapshot() for record in self.store.list()]

    def get_status_summary(self, execution_id: str) -> StatusSummary:
        snapshot = self.get_execution(execution_id)
        return StatusSummary(
            id=snapshot.id,
            state=snapshot.state,
            start_time=snapshot.start_time,
            end_time=snapshot.end_time,
            total_results=len(snapshot.results),
            passed=snapshot.count(Outcome.PASSED),
            failed=snapshot.count(Outcome.FAILED),
            skipped=snapshot.count(Outcome.SKIPPED),
        )

    def get_catalog(self) -> CatalogInfo:
        groups = {
            group: tuple(self.catalog.subject_names(group))
            for group in self.catalog.group_names()
        }
        return CatalogInfo(
            groups=groups,
            total_groups=len(groups),
            total_subjects=sum(len(names) for names in groups.values()),
        )

    def wait_for(
        self,
        execution_id: str,
        *,
        timeout: float = 30.0,
        interval: float = 0.1,
        on_poll: Callable[[ExecutionSnapshot], None] | None = None,
    ) -> ExecutionSnapshot:
        """
        Poll until the execution is terminal and return its final snapshot.

        Raises ExecutionTimeoutError when the timeout runs out first. The
        execution itself keeps running; only the wait is abandoned.
        """
        deadline = time.monotonic() + timeout
        while True:
            snapshot = self.get_execution(execution_id)
            if on_poll is not None:
                on_poll(snapshot)
            if snapshot.is_terminal:
                return snapshot
            if time.monotonic() >= deadline:
                raise ExecutionTimeoutError(execution_id, timeout)
            time.sleep(interval)
