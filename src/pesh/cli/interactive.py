"""Interactive read loop."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger
from rich.console import Console
from rich.text import Text

from pesh.config import Settings
from pesh.core.parser import Parser
from pesh.core.supervisor import Supervisor
from pesh.core.types import Category, CommandSet, ExecutionReport
from pesh.errors import PeshError, render_error

EXIT_COMMAND = "exit"


def is_exit_request(command_set: CommandSet) -> bool:
    return (
        command_set.category is Category.SINGLE
        and not command_set.is_empty
        and command_set.segments[0].program == EXIT_COMMAND
    )


class InteractiveShell:
    """Prompt, read, parse and execute until end of input or ``exit``."""

    def __init__(
        self,
        settings: Settings,
        supervisor: Supervisor | None = None,
        *,
        console: Console | None = None,
        error_console: Console | None = None,
        read_line: Callable[[str], str] | None = None,
    ) -> None:
        self._settings = settings
        self._parser = Parser(settings)
        self._supervisor = supervisor or Supervisor()
        self._console = console or Console(highlight=False)
        self._error_console = error_console or Console(stderr=True, highlight=False)
        self._read_line = read_line or self._console_input
        self.errors_reported = 0

    @property
    def supervisor(self) -> Supervisor:
        return self._supervisor

    def _console_input(self, prompt: str) -> str:
        return self._console.input(Text(prompt))

    def report(self, exc: PeshError) -> None:
        self.errors_reported += 1
        self._error_console.print(Text(render_error(exc), style="red"))

    def _parse(self, line: str) -> CommandSet | None:
        try:
            return self._parser.parse(line)
        except PeshError as exc:
            self.report(exc)
            return None

    def _execute(self, command_set: CommandSet) -> ExecutionReport | None:
        try:
            report = self._supervisor.execute(command_set)
        except PeshError as exc:
            self.report(exc)
            return None
        for error in report.errors:
            self.report(error)
        return report

    def run_line(self, line: str) -> tuple[bool, ExecutionReport | None]:
        """Handle one line.

        Returns whether the loop should continue and the execution report,
        which is None when nothing ran (blank line, parse error, exit, pipe).
        """

        line = line.strip()
        if not line:
            return True, None
        command_set = self._parse(line)
        if command_set is None or command_set.is_empty:
            return True, None
        if is_exit_request(command_set):
            return False, None
        return True, self._execute(command_set)

    def run(self) -> None:
        while True:
            prompt = self._settings.render_prompt(self._supervisor.cwd.path)
            try:
                line = self._read_line(prompt)
            except EOFError:
                self._console.print()
                break
            try:
                keep_going, _ = self.run_line(line)
                if not keep_going:
                    break
            except Exception:
                logger.exception("Unexpected error while handling {!r}", line)
        self._console.print("Exiting shell...")
