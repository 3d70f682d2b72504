from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phpmdtask")

    parser.add_argument(
        "--config",
        default="phpmd.yml",
        help="Path to config file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log resolved executables and built commands",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # run
    run = subparsers.add_parser("run", help="Run phpmd tasks")
    run.add_argument(
        "targets",
        nargs="*",
        help="Task ids, all tasks when omitted",
    )
    run.add_argument(
        "--no-fail-fast",
        action="store_true",
        help="Keep running the remaining tasks after one fails the build",
    )

    # list
    subparsers.add_parser("list", help="List tasks")

    # command
    command = subparsers.add_parser(
        "command", help="Print the phpmd command line of each task"
    )
    command.add_argument(
        "targets",
        nargs="*",
        help="Task ids, all tasks when omitted",
    )

    return parser
