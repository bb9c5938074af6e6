from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from suitetrack.config.types import CatalogConfig, SubjectConfig


@dataclass(frozen=True)
class WorkGroup:
    name: str
    subjects: tuple[SubjectConfig, ...]


class WorkUnit(ABC):
    """Something an execution runs: an ordered list of groups of subjects."""

    @abstractmethod
    def groups(self) -> list[WorkGroup]: ...

    @abstractmethod
    def describe(self) -> str: ...

    @abstractmethod
    def start_line(self) -> str: ...

    @abstractmethod
    def completion_line(self, failed: int) -> str: ...

    @abstractmethod
    def failure_line(self, reason: str) -> str: ...


class RunAll(WorkUnit):
    def __init__(self, catalog: CatalogConfig):
        # Freeze the group list now so later catalog edits can't change a running execution.
        self._groups = [
            WorkGroup(group, tuple(subjects)) for group, subjects in catalog
        ]

    def groups(self) -> list[WorkGroup]:
        return list(self._groups)

    def describe(self) -> str:
        return "all"

    def start_line(self) -> str:
        return "Starting test execution..."

    def completion_line(self, failed: int) -> str:
        if failed:
            return f"All tests completed with {failed} failure(s)"
        return "All tests completed successfully!"

    def failure_line(self, reason: str) -> str:
        return f"Test execution failed: {reason}"


class RunOne(WorkUnit):
    """
    A single subject.

    The subject is looked up in the catalog for its settings, but it doesn't
    have to be there: unknown subjects run with default settings.
    """

    def __init__(self, group: str, name: str, catalog: CatalogConfig | None = None):
        found = catalog.find_subject(group, name) if catalog is not None else None
        self.subject = found if found is not None else SubjectConfig(group, name)

    @classmethod
    def parse(
        cls, target: str, name: str | None = None, catalog: CatalogConfig | None = None
    ) -> RunOne:
        target = target.strip()
        if name is not None:
            return cls(target, name.strip(), catalog)

        group, dot, rest = target.rpartition(".")
        if not dot or not group or not rest:
            return cls(target, target, catalog)
        return cls(group, rest, catalog)

    def groups(self) -> list[WorkGroup]:
        return [WorkGroup(self.subject.group, (self.subject,))]

    def describe(self) -> str:
        return self.subject.qualified_name

    def start_line(self) -> str:
        return f"Running specific test: {self.subject.qualified_name}"

    def completion_line(self, failed: int) -> str:
        if failed:
            return "Test completed with a failure"
        return "Test completed successfully!"

    def failure_line(self, reason: str) -> str:
        return f"Test failed: {reason}"
