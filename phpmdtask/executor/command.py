from __future__ import annotations

import logging

from phpmdtask.config.types import LIST_SEPARATOR, TaskConfig

LOGGER = logging.getLogger(__name__)

OPTION_REPORT_FILE = "--reportfile"
OPTION_MIN_PRIORITY = "--minimumpriority"


def _join(task_id: str, what: str, items: list[str]) -> str:
    # phpmd splits these arguments on the separator, entries are not escaped.
    for item in items:
        if LIST_SEPARATOR in item:
            LOGGER.warning(
                "%s: %s entry %r contains %r and will be split by phpmd",
                task_id,
                what,
                item,
                LIST_SEPARATOR,
            )
    return LIST_SEPARATOR.join(items)


def build_command(
    executable: str, config: TaskConfig, sources: list[str] | None = None
) -> list[str]:
    """
    Build the phpmd argument list for a validated task configuration.

    Shape: executable, sources, report format, rule sets, then the optional
    report file and minimum priority options. `sources` is the list returned
    by `config.validate()`; the file sets are resolved again when omitted.
    """
    if sources is None:
        sources = config.sources()

    command = [
        executable,
        _join(config.id, "source", sources),
        config.formatter.type or "",
        _join(config.id, "rule set", config.rule_set_texts()),
    ]

    if config.formatter.to_file:
        command.extend([OPTION_REPORT_FILE, config.formatter.to_file])

    if config.minimum_priority is not None:
        command.extend([OPTION_MIN_PRIORITY, str(config.minimum_priority)])

    LOGGER.debug("%s: command %s", config.id, command)
    return command
