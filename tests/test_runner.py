# tests/test_runner.py
from __future__ import annotations

import pytest

from phpmdtask.config.fileset import FileList
from phpmdtask.config.types import Formatter, ProjectConfig, TaskConfig
from phpmdtask.executor.invoker import InProcessInvoker
from phpmdtask.executor.runner import Runner
from phpmdtask.executor.types import Outcome


def _project(tasks: dict[str, dict]) -> ProjectConfig:
    """
    tasks schema:
      id -> {rulesets: str, fail_on_error?: bool, fail_on_rule_violation?: bool}
    """
    built: dict[str, TaskConfig] = {}
    for tid, fields in tasks.items():
        task = TaskConfig(id=tid)
        task.add_formatter(Formatter(type="text", to_file=f"/tmp/{tid}.txt"))
        task.add_rule_set_files(fields["rulesets"])
        task.add_file_set(FileList([f"/src/{tid}.php"]))
        task.fail_on_error = fields.get("fail_on_error", False)
        task.fail_on_rule_violation = fields.get("fail_on_rule_violation", False)
        built[tid] = task
    return ProjectConfig(tasks=built)


def _tool(codes: dict[str, int], log: list[str]) -> InProcessInvoker:
    """Fake phpmd picking its exit code from the single source file name."""

    def entry(args: list[str]) -> int:
        tid = args[0].rsplit("/", 1)[-1].removesuffix(".php")
        log.append(tid)
        return codes.get(tid, 0)

    return InProcessInvoker(entry)


def test_runs_tasks_in_id_order() -> None:
    log: list[str] = []
    project = _project({"c": {"rulesets": "x"}, "a": {"rulesets": "x"}, "b": {"rulesets": "x"}})

    rr = Runner(project, _tool({}, log)).run_all()

    assert rr.failed == []
    assert rr.skipped == []
    assert log == ["a", "b", "c"]
    assert all(r.outcome is Outcome.SUCCESS for r in rr.results.values())


def test_non_fatal_outcomes_are_recorded() -> None:
    log: list[str] = []
    project = _project({"err": {"rulesets": "x"}, "viol": {"rulesets": "x"}})

    rr = Runner(project, _tool({"err": 1, "viol": 2}, log)).run_all()

    assert rr.failed == []
    assert rr.results["err"].outcome is Outcome.TOOL_ERROR
    assert rr.results["viol"].outcome is Outcome.VIOLATIONS_FOUND
    assert rr.results["viol"].fatal is False


def test_fail_fast_marks_remaining_as_skipped() -> None:
    log: list[str] = []
    project = _project(
        {
            "a": {"rulesets": "x", "fail_on_rule_violation": True},
            "b": {"rulesets": "x"},
            "c": {"rulesets": "x"},
        }
    )

    rr = Runner(project, _tool({"a": 2}, log)).run_all(fail_fast=True)

    assert rr.failed == ["a"]
    assert rr.skipped == ["b", "c"]
    assert list(rr.results.keys()) == ["a"]
    assert rr.results["a"].fatal is True
    assert "rule violations" in (rr.results["a"].message or "")
    assert log == ["a"]


def test_no_fail_fast_runs_everything() -> None:
    log: list[str] = []
    project = _project(
        {
            "a": {"rulesets": "x", "fail_on_error": True},
            "b": {"rulesets": ""},
            "c": {"rulesets": "x"},
        }
    )

    rr = Runner(project, _tool({"a": 1}, log)).run_all(fail_fast=False)

    # b never reaches the tool, its rule set is blank.
    assert rr.failed == ["a", "b"]
    assert rr.skipped == []
    assert log == ["a", "c"]


def test_run_targets_keeps_given_order_without_duplicates() -> None:
    log: list[str] = []
    project = _project({"a": {"rulesets": "x"}, "b": {"rulesets": "x"}})

    rr = Runner(project, _tool({}, log)).run_targets(["b", "a", "b"])

    assert rr.order == ["b", "a"]
    assert log == ["b", "a"]


def test_run_targets_unknown_raises_key_error() -> None:
    project = _project({"a": {"rulesets": "x"}})

    with pytest.raises(KeyError):
        Runner(project).run_targets(["nope"])
