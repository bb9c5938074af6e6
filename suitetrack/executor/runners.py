import os
import subprocess
import time
from abc import ABC, abstractmethod
from typing import Callable

from suitetrack.config.types import CatalogConfig, ConfigError, SubjectConfig
from suitetrack.executions.types import (
    Clock,
    ExecutionFailure,
    Outcome,
    TestResult,
    utcnow,
)


class Runner(ABC):
    @abstractmethod
    def run(self, subject: SubjectConfig) -> TestResult: ...


class SimulatedRunner(Runner):
    """Reports each subject's configured outcome after sleeping for its duration."""

    def __init__(
        self,
        *,
        time_scale: float = 1.0,
        clock: Clock = utcnow,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.time_scale = time_scale
        self._clock = clock
        self._sleep = sleep

    def run(self, subject: SubjectConfig) -> TestResult:
        delay = subject.duration_ms / 1000 * self.time_scale
        if delay > 0:
            self._sleep(delay)

        return TestResult(
            group=subject.group,
            name=subject.name,
            outcome=Outcome(subject.outcome),
            message=subject.message,
            duration_ms=subject.duration_ms,
            recorded_at=self._clock(),
        )


class ProcessRunner(Runner):
    """Runs each subject's shell command; exit code 0 passes."""

    def __init__(self, *, clock: Clock = utcnow):
        self._clock = clock

    def run(self, subject: SubjectConfig) -> TestResult:
        if subject.command is None:
            return TestResult(
                group=subject.group,
                name=subject.name,
                outcome=Outcome.SKIPPED,
                message="No command configured",
                duration_ms=0,
                recorded_at=self._clock(),
            )

        start = time.monotonic()
        try:
            result = subprocess.run(
                subject.command,
                shell=True,
                cwd=subject.working_dir or None,
                env={**os.environ, **subject.env},
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            raise ExecutionFailure(
                f"{subject.qualified_name}: could not start command: {exc}"
            ) from exc
        duration_ms = int((time.monotonic() - start) * 1000)

        if result.returncode == 0:
            return TestResult(
                group=subject.group,
                name=subject.name,
                outcome=Outcome.PASSED,
                message=_last_line(result.stdout) or "Command exited with code 0",
                duration_ms=duration_ms,
                recorded_at=self._clock(),
            )

        return TestResult(
            group=subject.group,
            name=subject.name,
            outcome=Outcome.FAILED,
            message=f"Command exited with code {result.returncode}",
            duration_ms=duration_ms,
            recorded_at=self._clock(),
            stack_trace=result.stderr or None,
        )


def _last_line(text: str) -> str:
    lines = text.strip().splitlines()
    return lines[-1] if lines else ""


def runner_for(catalog: CatalogConfig, *, clock: Clock = utcnow) -> Runner:
    match catalog.runner:
        case "simulate":
            return SimulatedRunner(time_scale=catalog.time_scale, clock=clock)
        case "process":
            return ProcessRunner(clock=clock)
        case _:
            raise ConfigError(f"Unknown runner: {catalog.runner!r}")
