"""Split one command segment into an argument vector."""

from __future__ import annotations

from loguru import logger

from pesh.config import OverflowPolicy
from pesh.errors import CommandLimitError

QUOTE = '"'
BLANKS = " \t"


def tokenize(segment: str, *, max_args: int | None = None, overflow: OverflowPolicy = "reject") -> list[str]:
    """Split a trimmed segment on spaces and tabs, honoring double-quoted spans.

    A quoted argument runs to the next double quote and is stored without
    the quotes. An unterminated quote makes the rest of the segment the final
    argument. An all-blank segment yields no arguments.
    """

    args: list[str] = []
    pos = 0
    end = len(segment)
    while pos < end:
        while pos < end and segment[pos] in BLANKS:
            pos += 1
        if pos >= end:
            break

        if segment[pos] == QUOTE:
            closing = segment.find(QUOTE, pos + 1)
            if closing == -1:
                args.append(segment[pos + 1 :])
                pos = end
            else:
                args.append(segment[pos + 1 : closing])
                pos = closing + 1
        else:
            start = pos
            while pos < end and segment[pos] not in BLANKS:
                pos += 1
            args.append(segment[start:pos])

    if max_args is not None and len(args) > max_args:
        if overflow == "reject":
            raise CommandLimitError(segment, f"too many arguments (limit {max_args})")
        logger.warning("Dropping {} argument(s) beyond limit {}", len(args) - max_args, max_args)
        del args[max_args:]
    return args
