from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from functools import lru_cache

from .types import ConfigurationError

DEFAULT_EXCLUDES: tuple[str, ...] = (
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/%*%",
    "**/._*",
    "**/CVS/**",
    "**/.cvsignore",
    "**/SCCS/**",
    "**/.svn/**",
    "**/.DS_Store",
    "**/.git/**",
    "**/.gitattributes",
    "**/.gitignore",
    "**/.gitmodules",
    "**/.hg/**",
    "**/.hgignore",
    "**/.bzr/**",
)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    """
    Translate an Ant style pattern into a regex over '/' separated paths.

    `**` spans any number of directories, `*` and `?` stay inside one path
    segment, and a trailing '/' means everything below that directory.
    """
    norm = pattern.strip().replace("\\", "/")
    if norm.endswith("/"):
        norm += "**"

    parts = norm.split("/")
    regex = ""
    for i, part in enumerate(parts):
        last = i == len(parts) - 1
        if part == "**":
            regex += ".*" if last else "(?:[^/]*/)*"
            continue
        for char in part:
            if char == "*":
                regex += "[^/]*"
            elif char == "?":
                regex += "[^/]"
            else:
                regex += re.escape(char)
        if not last:
            regex += "/"

    return re.compile(regex)


def match_path(pattern: str, rel_path: str) -> bool:
    return _compile(pattern).fullmatch(rel_path.replace("\\", "/")) is not None


@dataclass
class FileSet:
    dir: str
    includes: list[str] = field(default_factory=lambda: ["**"])
    excludes: list[str] = field(default_factory=list)
    default_excludes: bool = True

    def __post_init__(self) -> None:
        self.dir = os.path.abspath(self.dir)

    def _excluded(self, rel_path: str) -> bool:
        patterns = list(self.excludes)
        if self.default_excludes:
            patterns.extend(DEFAULT_EXCLUDES)
        return any(match_path(p, rel_path) for p in patterns)

    def included_files(self) -> list[str]:
        """Paths relative to `dir`, '/' separated, in sorted order."""
        if not os.path.isdir(self.dir):
            raise ConfigurationError(f"fileset dir does not exist: {self.dir}")

        found: list[str] = []
        for root, dirs, files in os.walk(self.dir):
            dirs.sort()
            rel_root = os.path.relpath(root, self.dir)
            for name in sorted(files):
                if rel_root == ".":
                    rel = name
                else:
                    rel = f"{rel_root.replace(os.sep, '/')}/{name}"
                if not any(match_path(p, rel) for p in self.includes):
                    continue
                if self._excluded(rel):
                    continue
                found.append(rel)

        return sorted(found)

    def resolve(self) -> list[str]:
        return [
            os.path.join(self.dir, *rel.split("/")) for rel in self.included_files()
        ]


@dataclass
class FileList:
    """Literal file paths, kept in the given order."""

    files: list[str]

    def resolve(self) -> list[str]:
        return [os.path.abspath(f) for f in self.files]
