# tests/test_resolver.py
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from phpmdtask.executor.resolver import (
    ExecutableResolver,
    os_exec_policy,
    search_path_from_env,
)
from phpmdtask.executor.types import ExecutableNotFoundError


def _fake_fs(*paths: str):
    existing = {os.path.join(*p.split("/")) for p in paths}
    return lambda path: path in existing


def test_bat_wins_over_php_in_same_directory() -> None:
    resolver = ExecutableResolver(
        "tool",
        search_path=["bin"],
        is_file=_fake_fs("bin/tool.php", "bin/tool.bat", "bin/tool"),
    )

    assert resolver.resolve().path == os.path.join("bin", "tool.bat")


def test_php_wins_over_bare_name() -> None:
    resolver = ExecutableResolver(
        "tool",
        search_path=["bin"],
        is_file=_fake_fs("bin/tool", "bin/tool.php"),
    )

    assert resolver.resolve().path == os.path.join("bin", "tool.php")


def test_directory_order_beats_variant_order() -> None:
    resolver = ExecutableResolver(
        "tool",
        search_path=["first", "second"],
        is_file=_fake_fs("first/tool", "second/tool.bat"),
    )

    assert resolver.resolve().path == os.path.join("first", "tool")


def test_exec_policy_rejects_candidate() -> None:
    denied = os.path.abspath(os.path.join("bin", "tool.bat"))
    resolver = ExecutableResolver(
        "tool",
        search_path=["bin"],
        is_file=_fake_fs("bin/tool.bat", "bin/tool"),
        exec_policy=lambda path: path != denied,
    )

    assert resolver.resolve().path == os.path.join("bin", "tool")


def test_empty_search_path_raises() -> None:
    resolver = ExecutableResolver("tool", search_path=[], is_file=lambda p: True)

    with pytest.raises(ExecutableNotFoundError) as info:
        resolver.resolve()

    assert info.value.searched == []
    assert "tool" in str(info.value)


def test_no_variant_anywhere_raises() -> None:
    resolver = ExecutableResolver(
        "tool", search_path=["a", "b"], is_file=_fake_fs("a/other")
    )

    with pytest.raises(ExecutableNotFoundError) as info:
        resolver.resolve()

    assert info.value.searched == [
        os.path.join("a", "tool.bat"),
        os.path.join("a", "tool.php"),
        os.path.join("a", "tool"),
        os.path.join("b", "tool.bat"),
        os.path.join("b", "tool.php"),
        os.path.join("b", "tool"),
    ]


def test_from_path_skips_search() -> None:
    resolver = ExecutableResolver.from_path("/opt/phpmd/bin/phpmd")

    assert resolver.resolve().path == "/opt/phpmd/bin/phpmd"


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, []),
        ("", []),
        ("   ", []),
        (os.pathsep.join(["/usr/bin", "", "/bin"]), ["/usr/bin", "/bin"]),
    ],
)
def test_search_path_from_env(value: str | None, expected: list[str]) -> None:
    env = {} if value is None else {"PATH": value}

    assert search_path_from_env(env) == expected


def test_default_search_path_reads_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "phpmd.php").write_text("<?php\n", encoding="utf-8")
    monkeypatch.setenv("PATH", str(tmp_path))

    assert ExecutableResolver().resolve().path == str(tmp_path / "phpmd.php")


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_os_exec_policy_checks_permission_bits(tmp_path: Path) -> None:
    script = tmp_path / "phpmd"
    script.write_text("#!/bin/sh\n", encoding="utf-8")
    script.chmod(0o644)
    assert os_exec_policy(str(script)) is False

    script.chmod(0o755)
    assert os_exec_policy(str(script)) is True
