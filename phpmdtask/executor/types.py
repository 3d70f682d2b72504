from dataclasses import dataclass
from enum import Enum

from phpmdtask.config.types import BuildError

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VIOLATION = 2

UNKNOWN_ERROR = "Unknown error."
VIOLATION_MESSAGE = "Stopping build since PHPMD found rule violations in the code"


class Outcome(Enum):
    SUCCESS = "success"
    TOOL_ERROR = "tool-error"
    VIOLATIONS_FOUND = "violations-found"


class ExecutableNotFoundError(BuildError):
    def __init__(self, name: str, searched: list[str]) -> None:
        super().__init__(f"Cannot locate {name} binary.")
        self.name = name
        self.searched = searched


class BuildFailure(BuildError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class LaunchError(RuntimeError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


@dataclass(frozen=True)
class ResolvedExecutable:
    path: str


@dataclass(frozen=True)
class InvocationResult:
    exit_code: int
    diagnostic: str | None = None


@dataclass(frozen=True)
class TaskResult:
    task_id: str
    outcome: Outcome | None
    fatal: bool
    message: str | None
    duration_s: float


@dataclass(frozen=True)
class RunResult:
    order: list[str]
    results: dict[str, TaskResult]
    failed: list[str]
    skipped: list[str]
