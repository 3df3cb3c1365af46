"""Application-level exception types for pesh."""

from __future__ import annotations

from collections.abc import Sequence


class PeshError(Exception):
    """Base exception for pesh."""

    kind = "error"


class ParseError(PeshError):
    """Raised when an input line is malformed."""

    kind = "parse error"

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason


class CommandLimitError(ParseError):
    """Raised when a line exceeds the configured segment or argument bound."""


class BuiltinError(PeshError):
    """Raised when a builtin is misused or its system effect fails."""

    kind = "builtin error"

    def __init__(self, builtin: str, reason: str) -> None:
        super().__init__(f"{builtin}: {reason}")
        self.builtin = builtin
        self.reason = reason


class SpawnError(PeshError):
    """Raised when a child process cannot be created."""

    kind = "spawn error"

    def __init__(self, argv: Sequence[str], reason: str) -> None:
        super().__init__(f"{argv[0]}: {reason}")
        self.argv = tuple(argv)
        self.reason = reason


class ExecError(PeshError):
    """Raised when the target program cannot be located or invoked."""

    kind = "exec error"

    NOT_FOUND = 127
    NOT_EXECUTABLE = 126

    def __init__(self, argv: Sequence[str], reason: str, status: int) -> None:
        super().__init__(f"{argv[0]}: {reason}")
        self.argv = tuple(argv)
        self.reason = reason
        self.status = status


class RedirectionIOError(PeshError):
    """Raised when the redirection target cannot be opened."""

    kind = "redirection error"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class PipeNotImplementedError(PeshError):
    """Raised for pipe command sets, which have no executor yet."""

    kind = "not implemented"

    def __init__(self) -> None:
        super().__init__("pipes are not implemented yet")


def render_error(exc: PeshError) -> str:
    """Render one user-facing error line."""
    return f"pesh: {exc.kind}: {exc}"
