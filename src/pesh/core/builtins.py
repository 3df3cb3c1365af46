"""Builtins handled inside the interpreter process."""

from __future__ import annotations

import os
from collections.abc import Callable

from loguru import logger

from pesh.core.types import Segment
from pesh.errors import BuiltinError


class WorkingDirectory:
    """The interpreter's current directory, owned explicitly.

    Children are started in this directory; only ``cd`` changes it.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self._path = os.path.realpath(path if path is not None else os.getcwd())

    @property
    def path(self) -> str:
        return self._path

    def __fspath__(self) -> str:
        return self._path

    def __str__(self) -> str:
        return self._path

    def change(self, target: str) -> str:
        """Move to ``target`` (relative to the current directory) or raise BuiltinError."""

        if "\x00" in target:
            raise BuiltinError("cd", "null byte in directory name")
        candidate = os.path.realpath(os.path.join(self._path, target))
        if not os.path.exists(candidate):
            raise BuiltinError("cd", f"no such file or directory: {target}")
        if not os.path.isdir(candidate):
            raise BuiltinError("cd", f"not a directory: {target}")
        if not os.access(candidate, os.X_OK):
            raise BuiltinError("cd", f"permission denied: {target}")
        logger.debug("cd {} -> {}", self._path, candidate)
        self._path = candidate
        return candidate


def change_directory(cwd: WorkingDirectory, segment: Segment) -> None:
    if len(segment.argv) < 2:
        raise BuiltinError("cd", "missing directory argument")
    cwd.change(segment.argv[1])


Builtin = Callable[[WorkingDirectory, Segment], None]

BUILTINS: dict[str, Builtin] = {
    "cd": change_directory,
}


def find_builtin(segment: Segment) -> Builtin | None:
    return BUILTINS.get(segment.program)
