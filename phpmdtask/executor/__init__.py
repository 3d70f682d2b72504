from .command import build_command
from .invoker import InProcessInvoker, Invoker, ProcessInvoker
from .policy import apply_policy, classify
from .resolver import ExecutableResolver
from .runner import Runner
from .task import PhpmdTask
from .types import (
    BuildFailure,
    ExecutableNotFoundError,
    InvocationResult,
    LaunchError,
    Outcome,
    RunResult,
    TaskResult,
)

__all__ = [
    "build_command",
    "apply_policy",
    "classify",
    "ExecutableResolver",
    "Invoker",
    "ProcessInvoker",
    "InProcessInvoker",
    "PhpmdTask",
    "Runner",
    "BuildFailure",
    "ExecutableNotFoundError",
    "InvocationResult",
    "LaunchError",
    "Outcome",
    "RunResult",
    "TaskResult",
]
