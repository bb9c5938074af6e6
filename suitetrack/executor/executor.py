from __future__ import annotations

import threading
import uuid
from typing import Callable

import structlog

from suitetrack.config import CatalogConfig
from suitetrack.executions import ExecutionRecord, ExecutionStore, Outcome

from .runners import Runner, runner_for
from .work import RunAll, RunOne, WorkGroup, WorkUnit

logger = structlog.get_logger()


def new_execution_id() -> str:
    return str(uuid.uuid4())


class Executor:
    """
    Starts executions in the background and records their progress.

    Each start creates a RUNNING record in the store, hands it to a fresh
    daemon thread and returns the id without waiting. The thread is the only
    writer of that record until it reaches COMPLETED or FAILED.
    """

    def __init__(
        self,
        store: ExecutionStore,
        catalog: CatalogConfig,
        runner: Runner | None = None,
        *,
        id_factory: Callable[[], str] = new_execution_id,
    ):
        self.store = store
        self.catalog = catalog
        self.runner = runner if runner is not None else runner_for(catalog)
        self._id_factory = id_factory

    def start_all(self) -> str:
        return self.start(RunAll(self.catalog))

    def start_one(self, group: str, name: str | None = None) -> str:
        return self.start(RunOne.parse(group, name, self.catalog))

    def start(self, unit: WorkUnit) -> str:
        record = self.store.create(self._id_factory())

        thread = threading.Thread(
            target=self._execute,
            args=(record, unit),
            name=f"execution-{record.id[:8]}",
            daemon=True,
        )
        logger.info("execution_started", execution_id=record.id, work=unit.describe())
        thread.start()
        return record.id

    def _execute(self, record: ExecutionRecord, unit: WorkUnit) -> None:
        log = logger.bind(execution_id=record.id, work=unit.describe())
        try:
            record.append_output(unit.start_line())
            failed = 0
            for group in unit.groups():
                failed += self._run_group(record, group, log)
            record.complete(unit.completion_line(failed))
        except Exception as exc:
            log.error("execution_failed", error=str(exc), exc_info=True)
            record.fail(unit.failure_line(str(exc) or type(exc).__name__))
        else:
            log.info("execution_completed", results=len(record.snapshot().results))

    def _run_group(self, record: ExecutionRecord, group: WorkGroup, log) -> int:
        record.append_output(f"Running {group.name} tests...")
        log.info("group_started", group=group.name, subjects=len(group.subjects))

        passed = failed = 0
        for subject in group.subjects:
            result = self.runner.run(subject)
            record.add_result(result)
            if result.outcome is Outcome.PASSED:
                passed += 1
            elif result.outcome is Outcome.FAILED:
                failed += 1

        record.append_output(f"{group.name} tests: {passed} passed, {failed} failed")
        return failed
