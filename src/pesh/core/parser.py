"""Input line classification and splitting."""

from __future__ import annotations

from loguru import logger

from pesh.config import Settings, default_settings
from pesh.core.tokenizer import BLANKS, QUOTE, tokenize
from pesh.core.types import OPERATOR_PRIORITY, Category, CommandSet, Segment
from pesh.errors import CommandLimitError, ParseError

_TRIM = BLANKS + "\n"
NUL = "\x00"


def detect_category(line: str) -> Category:
    """Return the category of the first operator present in priority order."""

    for category in OPERATOR_PRIORITY:
        if category.operator in line:
            return category
    return Category.SINGLE


class Parser:
    """Turns one raw input line into a CommandSet."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings()

    def parse(self, line: str) -> CommandSet:
        if NUL in line:
            raise ParseError(line, "null byte in command line")
        category = detect_category(line)
        if category is Category.SINGLE:
            command_set = self._parse_single(line)
        elif category is Category.REDIRECTION:
            command_set = self._parse_redirection(line)
        else:
            command_set = self._parse_delimited(line, category)
        logger.debug("Parsed {!r} as {} with {} segment(s)", line, category.name, len(command_set.segments))
        return command_set

    def _segment(self, text: str) -> Segment:
        argv = tokenize(text, max_args=self._settings.max_args, overflow=self._settings.overflow)
        return Segment(tuple(argv))

    def _parse_single(self, line: str) -> CommandSet:
        text = line.strip(_TRIM)
        if not text:
            return CommandSet(Category.SINGLE)
        return CommandSet(Category.SINGLE, (self._segment(text),))

    def _parse_redirection(self, line: str) -> CommandSet:
        command_part, _, file_part = line.partition(Category.REDIRECTION.operator)
        command_part = command_part.strip(_TRIM)
        file_part = file_part.strip(_TRIM)

        if not command_part:
            raise ParseError(line, "missing command before '>'")
        if not file_part:
            raise ParseError(line, "missing file name after '>'")
        for category in (Category.SEQUENTIAL, Category.PARALLEL, Category.PIPE):
            if category.operator in command_part:
                raise ParseError(line, f"cannot combine {category.operator!r} with '>'")

        if len(file_part) >= 2 and file_part.startswith(QUOTE) and file_part.endswith(QUOTE):
            target = file_part[1:-1]
            if not target:
                raise ParseError(line, "empty file name after '>'")
        elif " " in file_part:
            raise ParseError(line, "unquoted space in file name after '>'")
        else:
            target = file_part

        return CommandSet(Category.REDIRECTION, (self._segment(command_part),), redirect_target=target)

    def _parse_delimited(self, line: str, category: Category) -> CommandSet:
        tokens = line.split(category.operator)
        limit = self._settings.max_commands
        if len(tokens) > limit:
            if self._settings.overflow == "reject":
                raise CommandLimitError(line, f"too many commands (limit {limit})")
            logger.warning("Dropping {} command(s) beyond limit {}", len(tokens) - limit, limit)
            tokens = tokens[:limit]

        segments: list[Segment] = []
        for token in tokens:
            text = token.strip(_TRIM)
            if not text:
                raise ParseError(line, f"empty command around {category.operator!r}")
            segments.append(self._segment(text))

        if len(segments) < 2:
            raise ParseError(line, f"{category.operator!r} needs at least two commands")
        return CommandSet(category, tuple(segments))


def parse_line(line: str, settings: Settings | None = None) -> CommandSet:
    """Parse one input line with the given (or default) settings."""

    return Parser(settings).parse(line)
