from .executor import Executor, new_execution_id
from .runners import ProcessRunner, Runner, SimulatedRunner, runner_for
from .work import RunAll, RunOne, WorkGroup, WorkUnit

__all__ = [
    "Executor",
    "new_execution_id",
    "Runner",
    "SimulatedRunner",
    "ProcessRunner",
    "runner_for",
    "WorkUnit",
    "WorkGroup",
    "RunAll",
    "RunOne",
]
