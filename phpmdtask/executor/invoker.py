from __future__ import annotations

import subprocess
from typing import Callable, Protocol, Sequence

from .types import EXIT_SUCCESS, UNKNOWN_ERROR, InvocationResult, LaunchError


class Invoker(Protocol):
    # False when argv[0] does not have to be a resolved executable path.
    needs_executable: bool

    def invoke(self, argv: Sequence[str]) -> InvocationResult: ...


def _diagnostic(stderr: bytes | None) -> str:
    if not stderr:
        return UNKNOWN_ERROR
    text = stderr.decode(errors="replace").strip()
    return text or UNKNOWN_ERROR


class ProcessInvoker:
    """Run phpmd as a child process and wait for it to exit."""

    needs_executable = True

    def invoke(self, argv: Sequence[str]) -> InvocationResult:
        try:
            result = subprocess.run(
                list(argv),
                stderr=subprocess.PIPE,
                check=False,
            )
        except (OSError, ValueError) as exc:
            raise LaunchError(f"Cannot start {argv[0]}: {exc}") from exc

        if result.returncode == EXIT_SUCCESS:
            return InvocationResult(EXIT_SUCCESS)

        return InvocationResult(result.returncode, _diagnostic(result.stderr))


class InProcessInvoker:
    """
    Call a Python entry point instead of spawning a process.

    The entry point receives the arguments after the executable and returns
    the exit code phpmd would have returned, or calls sys.exit() with it.
    """

    needs_executable = False

    def __init__(self, entry: Callable[[list[str]], int]) -> None:
        self.entry = entry

    def invoke(self, argv: Sequence[str]) -> InvocationResult:
        try:
            code = self.entry(list(argv[1:]))
        except SystemExit as exc:
            # sys.exit() from a CLI style main: None is success, an int is
            # the exit status, anything else is an error message.
            if exc.code is None or isinstance(exc.code, int):
                code = exc.code or EXIT_SUCCESS
            else:
                raise LaunchError(str(exc.code)) from exc
        except Exception as exc:
            raise LaunchError(str(exc) or type(exc).__name__) from exc

        if code == EXIT_SUCCESS:
            return InvocationResult(EXIT_SUCCESS)

        return InvocationResult(code, UNKNOWN_ERROR)
