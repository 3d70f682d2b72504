import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from .fileset import FileSet
from .types import (
    ConfigurationError,
    Formatter,
    ProjectConfig,
    RuleSet,
    TaskConfig,
    UnsupportedConfigFormatError,
)

TASK_KEYS = {
    "formatter",
    "rulesets",
    "filesets",
    "minimum_priority",
    "fail_on_error",
    "fail_on_rule_violation",
    "binary",
    "executable",
}
FORMATTER_KEYS = {"type", "to_file"}
FILESET_KEYS = {"dir", "includes", "excludes", "default_excludes"}


def load_project(path: str | Path) -> ProjectConfig:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigurationError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigurationError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    return _build_project_config(raw_file, pure_path.parent)


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    text = path.read_text(encoding="utf-8")
    match fmt:
        case "yaml":
            try:
                raw_file = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"{path}: invalid YAML") from exc
        case "toml":
            try:
                raw_file = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigurationError(f"{path}: invalid TOML") from exc
        case "json":
            try:
                raw_file = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ConfigurationError(f"{path}: invalid JSON") from exc
        case _:
            raise AssertionError("Unreachable")

    if not isinstance(raw_file, Mapping):
        raise ConfigurationError(
            f"{path}: {fmt.upper()} parsed succesfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_project_config(raw: Mapping[str, Any], base_dir: Path) -> ProjectConfig:
    tasks = {}

    if not "tasks" in raw:
        raise ConfigurationError("Missing 'tasks' field")

    if not isinstance(raw["tasks"], Mapping):
        raise ConfigurationError(
            f"'tasks' must be a mapping, got {type(raw['tasks'])}"
        )

    if len(raw["tasks"]) < 1:
        raise ConfigurationError("There must be at least one task in the config file")

    for task_id, fields in raw["tasks"].items():
        if not isinstance(task_id, str):
            raise ConfigurationError(f"Task id must be a string, got {type(task_id)}")

        if not isinstance(fields, Mapping):
            raise ConfigurationError(f"{task_id} must be a mapping")

        task_id_norm = task_id.strip()

        if len(task_id_norm) < 1:
            raise ConfigurationError("A task id can't be empty")

        if task_id_norm in tasks:
            raise ConfigurationError(
                f"Duplicate task id after normalization: {task_id_norm}"
            )

        tasks[task_id_norm] = _build_task_config(task_id_norm, fields, base_dir)

    return ProjectConfig(tasks=tasks)


def _string(task_id: str, name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{task_id}: {name} should be a string")

    if len(value.strip()) < 1:
        raise ConfigurationError(
            f"{task_id}: {name} is empty, provide a value or remove this field"
        )

    return value.strip()


def _string_list(task_id: str, name: str, value: Any) -> list[str]:
    if not isinstance(value, list):
        raise ConfigurationError(f"{task_id}: {name} should be a list")

    return [_string(task_id, f"{name} entry", item) for item in value]


def _flag(task_id: str, name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{task_id}: {name} should be true or false")

    return value


def _check_keys(task_id: str, where: str, fields: Mapping[str, Any], keys: set[str]) -> None:
    for field in fields.keys():
        if field not in keys:
            raise ConfigurationError(f"{task_id}: Can't process {where}: {field}")


def _build_formatter(task_id: str, raw: Any, base_dir: Path) -> Formatter:
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"{task_id}: formatter should be a mapping")

    _check_keys(task_id, "formatter field", raw, FORMATTER_KEYS)

    fmt_type = None
    to_file = None
    # Blank values are left for TaskConfig.validate() to report.
    if raw.get("type") is not None:
        if not isinstance(raw["type"], str):
            raise ConfigurationError(f"{task_id}: formatter type should be a string")
        fmt_type = raw["type"].strip()

    if raw.get("to_file") is not None:
        to_file = str(base_dir / _string(task_id, "formatter to_file", raw["to_file"]))

    return Formatter(type=fmt_type, to_file=to_file)


def _build_file_set(task_id: str, raw: Any, base_dir: Path) -> FileSet:
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"{task_id}: each fileset should be a mapping")

    _check_keys(task_id, "fileset field", raw, FILESET_KEYS)

    if not "dir" in raw:
        raise ConfigurationError(f"{task_id}: fileset is missing 'dir'")

    file_set = FileSet(dir=str(base_dir / _string(task_id, "fileset dir", raw["dir"])))

    if "includes" in raw:
        file_set.includes = _string_list(task_id, "fileset includes", raw["includes"])

    if "excludes" in raw:
        file_set.excludes = _string_list(task_id, "fileset excludes", raw["excludes"])

    if "default_excludes" in raw:
        file_set.default_excludes = _flag(
            task_id, "fileset default_excludes", raw["default_excludes"]
        )

    return file_set


def _build_task_config(
    task_id: str, fields: Mapping[str, Any], base_dir: Path
) -> TaskConfig:
    task = TaskConfig(id=task_id)

    _check_keys(task_id, "task field", fields, TASK_KEYS)

    if "formatter" in fields:
        raw_formatters = fields["formatter"]
        if not isinstance(raw_formatters, list):
            raw_formatters = [raw_formatters]
        # Last formatter wins, one report per run.
        for raw_formatter in raw_formatters:
            task.add_formatter(_build_formatter(task_id, raw_formatter, base_dir))

    if "rulesets" in fields:
        rulesets = fields["rulesets"]
        if isinstance(rulesets, str):
            task.add_rule_set_files(rulesets)
        elif isinstance(rulesets, list):
            for item in rulesets:
                if not isinstance(item, str):
                    raise ConfigurationError(
                        f"{task_id}: {item} should be a string in the rule set list"
                    )
                task.add_rule_set(RuleSet(item))
        else:
            raise ConfigurationError(
                f"{task_id}: rulesets should be a string or a list of strings"
            )

    if "filesets" in fields:
        if not isinstance(fields["filesets"], list):
            raise ConfigurationError(f"{task_id}: filesets should be a list")

        for raw_file_set in fields["filesets"]:
            task.add_file_set(_build_file_set(task_id, raw_file_set, base_dir))

    if "minimum_priority" in fields:
        priority = fields["minimum_priority"]
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise ConfigurationError(f"{task_id}: minimum_priority should be an integer")

        if priority < 0:
            raise ConfigurationError(f"{task_id}: minimum_priority can't be negative")

        task.set_minimum_priority(priority)

    if "fail_on_error" in fields:
        task.fail_on_error = _flag(task_id, "fail_on_error", fields["fail_on_error"])

    if "fail_on_rule_violation" in fields:
        task.fail_on_rule_violation = _flag(
            task_id, "fail_on_rule_violation", fields["fail_on_rule_violation"]
        )

    if "binary" in fields:
        task.binary = _string(task_id, "binary", fields["binary"])

    if "executable" in fields:
        task.executable = str(base_dir / _string(task_id, "executable", fields["executable"]))

    return task
