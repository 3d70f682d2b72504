from __future__ import annotations

from phpmdtask.config.types import TaskConfig

from .command import build_command
from .invoker import Invoker, ProcessInvoker
from .policy import apply_policy, classify
from .resolver import ExecutableResolver
from .types import LaunchError, Outcome


class PhpmdTask:
    """
    One phpmd build step.

    `execute()` either returns the non-fatal Outcome or raises a BuildError
    subclass: ConfigurationError and ExecutableNotFoundError always, and
    BuildFailure when the failure flags say so.
    """

    def __init__(
        self,
        config: TaskConfig,
        invoker: Invoker | None = None,
        resolver: ExecutableResolver | None = None,
    ):
        self.config = config
        self.invoker = invoker or ProcessInvoker()
        self.resolver = resolver

    def _resolver(self) -> ExecutableResolver:
        if self.resolver is not None:
            return self.resolver
        if self.config.executable is not None:
            return ExecutableResolver.from_path(self.config.executable)
        return ExecutableResolver(name=self.config.binary)

    def prepare(self) -> list[str]:
        sources = self.config.validate()

        if self.invoker.needs_executable:
            executable = self._resolver().resolve().path
        else:
            executable = self.config.executable or self.config.binary

        return build_command(executable, self.config, sources)

    def execute(self) -> Outcome:
        command = self.prepare()

        try:
            result = self.invoker.invoke(command)
        except LaunchError as exc:
            outcome, diagnostic = Outcome.TOOL_ERROR, str(exc)
        else:
            outcome, diagnostic = classify(result), result.diagnostic

        return apply_policy(
            self.config.id,
            outcome,
            diagnostic,
            fail_on_error=self.config.fail_on_error,
            fail_on_rule_violation=self.config.fail_on_rule_violation,
        )
