"""Shared core dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pesh.errors import PeshError


class Category(Enum):
    """Operator category of one input line."""

    SINGLE = ""
    SEQUENTIAL = "##"
    PARALLEL = "&&"
    PIPE = "|"
    REDIRECTION = ">"

    @property
    def operator(self) -> str:
        return self.value


# Detection is by presence, in this order, regardless of position in the line.
OPERATOR_PRIORITY: tuple[Category, ...] = (
    Category.SEQUENTIAL,
    Category.PARALLEL,
    Category.PIPE,
    Category.REDIRECTION,
)


@dataclass(frozen=True)
class Segment:
    """One command: program name followed by its arguments."""

    argv: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.argv:
            raise ValueError("segment argv must not be empty")

    @property
    def program(self) -> str:
        return self.argv[0]

    @property
    def args(self) -> tuple[str, ...]:
        return self.argv[1:]

    def exec_args(self) -> list[str]:
        return list(self.argv)


@dataclass(frozen=True)
class CommandSet:
    """Parsed result of one input line."""

    category: Category
    segments: tuple[Segment, ...] = ()
    redirect_target: str | None = None

    def __post_init__(self) -> None:
        count = len(self.segments)
        if self.category is Category.REDIRECTION:
            if count != 1:
                raise ValueError("redirection needs exactly one segment")
            if self.redirect_target is None:
                raise ValueError("redirection needs a target")
            return
        if self.redirect_target is not None:
            raise ValueError(f"{self.category.name} cannot carry a redirection target")
        if self.category is Category.SINGLE:
            if count > 1:
                raise ValueError("single command set holds at most one segment")
        elif count < 2:
            raise ValueError(f"{self.category.name} needs at least two segments")

    @property
    def is_empty(self) -> bool:
        return not self.segments

    def describe(self) -> list[tuple[str, str]]:
        rows = [("type", self.category.name)]
        if self.category is not Category.SINGLE:
            rows[0] = ("type", f"{self.category.name} ({self.category.operator})")
        rows.append(("commands", str(len(self.segments))))
        for index, segment in enumerate(self.segments, start=1):
            rows.append((f"command {index}", " ".join(f'"{arg}"' for arg in segment.argv)))
        if self.redirect_target is not None:
            rows.append(("redirection file", f'"{self.redirect_target}"'))
        return rows


@dataclass
class SegmentOutcome:
    """What happened to one segment during execution."""

    argv: tuple[str, ...]
    pid: int | None = None
    status: int | None = None
    error: PeshError | None = None


@dataclass
class ExecutionReport:
    """Outcomes of one executed command set, in segment order."""

    category: Category
    outcomes: list[SegmentOutcome] = field(default_factory=list)

    @property
    def errors(self) -> list[PeshError]:
        return [outcome.error for outcome in self.outcomes if outcome.error is not None]

    @property
    def statuses(self) -> list[int | None]:
        return [outcome.status for outcome in self.outcomes]

    @property
    def ok(self) -> bool:
        return not self.errors
