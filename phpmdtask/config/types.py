from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Protocol

DEFAULT_BINARY = "phpmd"

# Separator used for both the flattened source list and the rule set list.
LIST_SEPARATOR = ","


class BuildError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class ConfigurationError(BuildError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigurationError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class FileSource(Protocol):
    """Anything the host can resolve into a list of absolute file paths."""

    def resolve(self) -> list[str]: ...


@dataclass
class Formatter:
    type: str | None = None
    to_file: str | None = None

    def __post_init__(self) -> None:
        if self.to_file is not None and self.to_file.strip():
            self.to_file = os.path.abspath(self.to_file)

    def validate(self) -> None:
        if self.type is None or len(self.type.strip()) < 1:
            raise ConfigurationError("Attribute formatter@type must be defined.")
        if self.to_file is None or len(self.to_file.strip()) < 1:
            raise ConfigurationError("Attribute formatter@toFile must be defined.")


@dataclass
class RuleSet:
    text: str = ""

    def __post_init__(self) -> None:
        self.text = self.text.strip()

    def validate(self) -> None:
        if len(self.text) < 1:
            raise ConfigurationError("RuleSet cannot be empty.")


@dataclass
class TaskConfig:
    id: str = "phpmd"
    formatter: Formatter = field(default_factory=Formatter)
    rule_sets: list[RuleSet] = field(default_factory=list)
    file_sets: list[FileSource] = field(default_factory=list)
    minimum_priority: int | None = None
    fail_on_error: bool = False
    fail_on_rule_violation: bool = False
    binary: str = DEFAULT_BINARY
    executable: str | None = None

    def add_formatter(self, formatter: Formatter) -> None:
        self.formatter = formatter

    def add_rule_set(self, rule_set: RuleSet) -> None:
        self.rule_sets.append(rule_set)

    def add_rule_set_files(self, text: str) -> None:
        """Register every entry of a comma separated rule set string."""
        for item in text.split(LIST_SEPARATOR):
            self.add_rule_set(RuleSet(item))

    def add_file_set(self, file_set: FileSource) -> None:
        self.file_sets.append(file_set)

    def set_minimum_priority(self, priority: int | None) -> None:
        self.minimum_priority = priority

    def sources(self) -> list[str]:
        out: list[str] = []
        for file_set in self.file_sets:
            out.extend(file_set.resolve())
        return out

    def rule_set_texts(self) -> list[str]:
        return [rule_set.text for rule_set in self.rule_sets]

    def validate(self) -> list[str]:
        """
        Raise ConfigurationError for the first missing piece of configuration.

        Checked in order: formatter type, formatter output file, rule sets,
        source files. Returns the flattened source list that was checked.
        Calling it again on the same configuration gives the same answer.
        """
        self.formatter.validate()

        if len(self.rule_sets) < 1:
            raise ConfigurationError(
                f"{self.id}: At least 1 rule set must be specified."
            )
        for rule_set in self.rule_sets:
            rule_set.validate()

        sources = self.sources()
        if len(sources) < 1:
            raise ConfigurationError(
                f"{self.id}: At least 1 source file must be specified."
            )

        return sources


@dataclass
class ProjectConfig:
    tasks: dict[str, TaskConfig]

    def has_task(self, id: str) -> bool:
        return True if id in self.tasks else False

    def get_task(self, id: str) -> TaskConfig:
        if not self.has_task(id):
            raise KeyError(id)

        return self.tasks[id]

    def tasks_ids(self) -> list[str]:
        return sorted(self.tasks.keys())
