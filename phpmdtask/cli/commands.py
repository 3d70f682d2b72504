from __future__ import annotations

import argparse
import logging
import shlex
import sys

from phpmdtask.config import BuildError, ConfigurationError, load_project
from phpmdtask.executor import PhpmdTask, RunResult, Runner

from .args import build_parser

LOGGER = logging.getLogger("phpmdtask")
_HANDLER: logging.Handler | None = None


def _configure_logging(verbose: bool) -> None:
    global _HANDLER
    if _HANDLER is not None:
        LOGGER.removeHandler(_HANDLER)
    _HANDLER = logging.StreamHandler(stream=sys.stderr)
    _HANDLER.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    LOGGER.addHandler(_HANDLER)
    LOGGER.setLevel(logging.DEBUG if verbose else logging.INFO)


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        _configure_logging(args.verbose)

        match args.command:
            case "run":
                return cmd_run(args)
            case "list":
                return cmd_list(args)
            case "command":
                return cmd_command(args)
            case _:
                return 2

    except (ConfigurationError, KeyError) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def main() -> None:
    sys.exit(run_cli())


def cmd_run(args: argparse.Namespace) -> int:
    project = load_project(args.config)
    runner = Runner(project)
    fail_fast = not args.no_fail_fast
    targets: list[str] = args.targets

    if len(targets) == 0:
        rr = runner.run_all(fail_fast=fail_fast)
    else:
        rr = runner.run_targets(targets, fail_fast=fail_fast)

    _print_result(rr)
    return 1 if rr.failed else 0


def cmd_list(args: argparse.Namespace) -> int:
    project = load_project(args.config)
    for tid in project.tasks_ids():
        print(tid)
    return 0


def cmd_command(args: argparse.Namespace) -> int:
    project = load_project(args.config)
    targets: list[str] = args.targets or project.tasks_ids()
    code = 0

    for tid in targets:
        task = PhpmdTask(project.get_task(tid))
        try:
            command = task.prepare()
        except BuildError as exc:
            print(f"FAIL {tid}: {exc}", file=sys.stderr)
            code = 1
            continue
        print(f"{tid}: {shlex.join(command)}")

    return code


def _print_result(rr: RunResult) -> None:
    for tid in rr.order:
        if tid in rr.results:
            result = rr.results[tid]
            if result.fatal or result.outcome is None:
                print(f"FAIL {tid}, {result.duration_s:.3f}s: {result.message}")
            else:
                print(f"OK {tid}, {result.duration_s:.3f}s, {result.outcome.value}")
        else:
            print(f"SKIP {tid}")
