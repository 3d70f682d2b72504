from __future__ import annotations

import logging
import os
from typing import Callable, Sequence

from phpmdtask.config.types import DEFAULT_BINARY

from .types import ExecutableNotFoundError, ResolvedExecutable

LOGGER = logging.getLogger(__name__)

# Tried in this order inside every search directory.
NAME_VARIANTS: tuple[str, ...] = ("{name}.bat", "{name}.php", "{name}")

ExecPolicy = Callable[[str], bool]


def os_exec_policy(path: str) -> bool:
    return os.access(path, os.X_OK)


def search_path_from_env(environ: dict[str, str] | None = None) -> list[str]:
    env = os.environ if environ is None else environ
    directories = env.get("PATH")
    if directories is None or directories.strip() == "":
        return []
    return [d for d in directories.split(os.pathsep) if d]


class ExecutableResolver:
    """
    Find the phpmd executable on a search path.

    Directories are searched in order. Inside each directory the `.bat`
    variant wins over `.php`, which wins over the bare name. A candidate
    counts when it is a file and `exec_policy` allows running it; with no
    policy every existing file is accepted.
    """

    def __init__(
        self,
        name: str = DEFAULT_BINARY,
        search_path: Sequence[str] | None = None,
        exec_policy: ExecPolicy | None = None,
        is_file: Callable[[str], bool] = os.path.isfile,
    ) -> None:
        self.name = name
        self.search_path = search_path
        self.exec_policy = exec_policy
        self.is_file = is_file
        self._explicit: str | None = None

    @classmethod
    def from_path(cls, path: str) -> ExecutableResolver:
        resolver = cls(name=os.path.basename(path) or path)
        resolver._explicit = path
        return resolver

    def _directories(self) -> list[str]:
        if self.search_path is None:
            return search_path_from_env()
        return [d for d in self.search_path if d]

    def _usable(self, path: str) -> bool:
        if not self.is_file(path):
            return False
        if self.exec_policy is None:
            return True
        return self.exec_policy(os.path.abspath(path))

    def candidates(self) -> list[str]:
        out: list[str] = []
        for directory in self._directories():
            for variant in NAME_VARIANTS:
                out.append(os.path.join(directory, variant.format(name=self.name)))
        return out

    def resolve(self) -> ResolvedExecutable:
        if self._explicit is not None:
            return ResolvedExecutable(self._explicit)

        searched = self.candidates()
        for path in searched:
            if self._usable(path):
                LOGGER.debug("resolved %s to %s", self.name, path)
                return ResolvedExecutable(path)

        raise ExecutableNotFoundError(self.name, searched)
