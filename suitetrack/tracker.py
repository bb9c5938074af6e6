from __future__ import annotations

from suitetrack.config import CatalogConfig
from suitetrack.executions import ExecutionSnapshot, ExecutionStore
from suitetrack.executor import Executor, Runner
from suitetrack.query import CatalogInfo, QueryService, StatusSummary


class Tracker:
    """The surface an API layer talks to: start executions, then poll them."""

    def __init__(self, catalog: CatalogConfig, runner: Runner | None = None):
        self.store = ExecutionStore()
        self.executor = Executor(self.store, catalog, runner)
        self.query = QueryService(self.store, catalog)

    def start_all(self) -> str:
        return self.executor.start_all()

    def start_one(self, group: str, name: str | None = None) -> str:
        return self.executor.start_one(group, name)

    def get_execution(self, execution_id: str) -> ExecutionSnapshot:
        return self.query.get_execution(execution_id)

    def list_executions(self) -> list[ExecutionSnapshot]:
        return self.query.list_executions()

    def get_status_summary(self, execution_id: str) -> StatusSummary:
        return self.query.get_status_summary(execution_id)

    def get_catalog(self) -> CatalogInfo:
        return self.query.get_catalog()
