from __future__ import annotations

import logging
import time

from phpmdtask.config.types import BuildError, ProjectConfig

from .invoker import Invoker
from .task import PhpmdTask
from .types import RunResult, TaskResult

LOGGER = logging.getLogger(__name__)


class Runner:
    def __init__(self, project: ProjectConfig, invoker: Invoker | None = None):
        self.project = project
        self.invoker = invoker

    def _run(self, order: list[str], *, fail_fast: bool) -> RunResult:
        results: dict[str, TaskResult] = {}
        failed: list[str] = []
        skipped: list[str] = []

        for i, tid in enumerate(order):
            task = PhpmdTask(self.project.get_task(tid), invoker=self.invoker)

            start = time.monotonic()
            try:
                outcome = task.execute()
            except BuildError as exc:
                results[tid] = TaskResult(
                    tid, None, True, str(exc), time.monotonic() - start
                )
                failed.append(tid)
                if fail_fast:
                    skipped.extend(order[i + 1 :])
                    break
                continue

            LOGGER.debug("%s: %s", tid, outcome.value)
            results[tid] = TaskResult(
                tid, outcome, False, None, time.monotonic() - start
            )

        return RunResult(order, results, failed, skipped)

    def run_all(self, *, fail_fast: bool = True) -> RunResult:
        return self._run(self.project.tasks_ids(), fail_fast=fail_fast)

    def run_targets(self, targets: list[str], *, fail_fast: bool = True) -> RunResult:
        order: list[str] = []
        for target in targets:
            if not self.project.has_task(target):
                raise KeyError(target)
            if target not in order:
                order.append(target)
        return self._run(order, fail_fast=fail_fast)
