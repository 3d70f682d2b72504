from __future__ import annotations

import logging

from .types import (
    EXIT_SUCCESS,
    EXIT_VIOLATION,
    VIOLATION_MESSAGE,
    BuildFailure,
    InvocationResult,
    Outcome,
)

LOGGER = logging.getLogger(__name__)


def classify(result: InvocationResult) -> Outcome:
    if result.exit_code == EXIT_SUCCESS:
        return Outcome.SUCCESS
    if result.exit_code == EXIT_VIOLATION:
        return Outcome.VIOLATIONS_FOUND
    return Outcome.TOOL_ERROR


def apply_policy(
    task_id: str,
    outcome: Outcome,
    diagnostic: str | None,
    *,
    fail_on_error: bool,
    fail_on_rule_violation: bool,
) -> Outcome:
    """
    Raise BuildFailure when the flags make `outcome` fatal, else return it.

    Tool errors are always logged, violations only when they don't fail the
    build.
    """
    match outcome:
        case Outcome.SUCCESS:
            return outcome
        case Outcome.TOOL_ERROR:
            LOGGER.error("%s: %s", task_id, diagnostic)
            if fail_on_error:
                raise BuildFailure(diagnostic)
            return outcome
        case Outcome.VIOLATIONS_FOUND:
            if fail_on_rule_violation:
                raise BuildFailure(VIOLATION_MESSAGE)
            LOGGER.info("%s: phpmd found rule violations", task_id)
            return outcome
        case _:
            raise AssertionError("Unreachable")
