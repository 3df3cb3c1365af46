"""Process orchestration for parsed command sets."""

from __future__ import annotations

import errno
import os
import subprocess

from loguru import logger

from pesh.core.builtins import WorkingDirectory, find_builtin
from pesh.core.signals import restore_default_signals
from pesh.core.types import Category, CommandSet, ExecutionReport, Segment, SegmentOutcome
from pesh.errors import (
    ExecError,
    PeshError,
    PipeNotImplementedError,
    RedirectionIOError,
    SpawnError,
)

REDIRECT_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
REDIRECT_MODE = 0o644

_NOT_EXECUTABLE_ERRNOS = {errno.EACCES, errno.EPERM, errno.ENOEXEC, errno.EISDIR}
_NOT_FOUND_ERRNOS = {errno.ENOENT, errno.ENOTDIR}


class Supervisor:
    """Runs command sets as child processes.

    ``##`` waits for each segment before starting the next and never stops
    early on failure. ``&&`` starts every segment before waiting for any of
    them; it is concurrency, not a conditional chain.
    """

    def __init__(self, cwd: WorkingDirectory | None = None) -> None:
        self.cwd = cwd or WorkingDirectory()

    def execute(self, command_set: CommandSet) -> ExecutionReport:
        report = ExecutionReport(command_set.category)
        if command_set.is_empty:
            return report

        match command_set.category:
            case Category.SINGLE:
                report.outcomes.append(self._run_foreground(command_set.segments[0]))
            case Category.SEQUENTIAL:
                self._run_sequential(command_set.segments, report)
            case Category.PARALLEL:
                self._run_parallel(command_set.segments, report)
            case Category.REDIRECTION:
                report.outcomes.append(self._run_redirected(command_set.segments[0], command_set.redirect_target or ""))
            case Category.PIPE:
                raise PipeNotImplementedError()

        for outcome in report.outcomes:
            if outcome.error is not None:
                logger.debug("{}: {}", outcome.error.kind, outcome.error)
        return report

    def spawn(self, segment: Segment, *, stdout: int | None = None) -> subprocess.Popen[bytes]:
        """Start one child in the supervisor's directory with default signal dispositions."""

        argv = segment.exec_args()
        try:
            # User-supplied argv, executed without a shell.
            process = subprocess.Popen(  # noqa: S603
                argv,
                cwd=self.cwd.path,
                stdout=stdout,
                preexec_fn=restore_default_signals,  # noqa: PLW1509
            )
        except OSError as exc:
            raise self._classify_spawn_failure(segment, exc) from exc
        except ValueError as exc:
            raise ExecError(argv, str(exc), ExecError.NOT_EXECUTABLE) from exc
        except subprocess.SubprocessError as exc:
            raise SpawnError(argv, str(exc)) from exc
        logger.debug("Spawned pid={} argv={} cwd={}", process.pid, argv, self.cwd.path)
        return process

    def _classify_spawn_failure(self, segment: Segment, exc: OSError) -> PeshError:
        argv = segment.argv
        if exc.filename == self.cwd.path:
            return SpawnError(argv, f"working directory unavailable: {self.cwd.path}")
        if exc.errno in _NOT_FOUND_ERRNOS:
            return ExecError(argv, "command not found", ExecError.NOT_FOUND)
        if exc.errno in _NOT_EXECUTABLE_ERRNOS:
            reason = exc.strerror or "cannot execute"
            return ExecError(argv, reason.lower(), ExecError.NOT_EXECUTABLE)
        return SpawnError(argv, exc.strerror or str(exc))

    def _reap(self, process: subprocess.Popen[bytes], outcome: SegmentOutcome) -> None:
        outcome.status = process.wait()
        logger.debug("Reaped pid={} status={}", process.pid, outcome.status)

    def _run_builtin(self, segment: Segment, outcome: SegmentOutcome) -> bool:
        builtin = find_builtin(segment)
        if builtin is None:
            return False
        try:
            builtin(self.cwd, segment)
            outcome.status = 0
        except PeshError as exc:
            outcome.status = 1
            outcome.error = exc
        return True

    def _start(
        self, segment: Segment, outcome: SegmentOutcome, *, stdout: int | None = None
    ) -> subprocess.Popen[bytes] | None:
        """Spawn ``segment``, recording an ExecError on ``outcome``. SpawnError propagates."""
        try:
            process = self.spawn(segment, stdout=stdout)
        except ExecError as exc:
            outcome.status = exc.status
            outcome.error = exc
            return None
        outcome.pid = process.pid
        return process

    def _run_foreground(self, segment: Segment) -> SegmentOutcome:
        outcome = SegmentOutcome(segment.argv)
        if self._run_builtin(segment, outcome):
            return outcome
        try:
            process = self._start(segment, outcome)
        except SpawnError as exc:
            outcome.error = exc
            return outcome
        if process is not None:
            self._reap(process, outcome)
        return outcome

    def _run_sequential(self, segments: tuple[Segment, ...], report: ExecutionReport) -> None:
        for segment in segments:
            outcome = self._run_foreground(segment)
            report.outcomes.append(outcome)
            if isinstance(outcome.error, SpawnError):
                return

    def _run_parallel(self, segments: tuple[Segment, ...], report: ExecutionReport) -> None:
        running: list[tuple[subprocess.Popen[bytes], SegmentOutcome]] = []
        try:
            for segment in segments:
                outcome = SegmentOutcome(segment.argv)
                report.outcomes.append(outcome)
                # cd runs inline so later spawns in this set see the new directory.
                if self._run_builtin(segment, outcome):
                    continue
                try:
                    process = self._start(segment, outcome)
                except SpawnError as exc:
                    outcome.error = exc
                    break
                if process is not None:
                    running.append((process, outcome))
        finally:
            for process, outcome in running:
                self._reap(process, outcome)

    def _run_redirected(self, segment: Segment, target: str) -> SegmentOutcome:
        outcome = SegmentOutcome(segment.argv)
        path = os.path.join(self.cwd.path, target)
        try:
            fd = os.open(path, REDIRECT_FLAGS, REDIRECT_MODE)
        except OSError as exc:
            outcome.status = 1
            outcome.error = RedirectionIOError(target, (exc.strerror or str(exc)).lower())
            return outcome
        except ValueError as exc:
            outcome.status = 1
            outcome.error = RedirectionIOError(target, str(exc))
            return outcome
        try:
            if self._run_builtin(segment, outcome):
                return outcome
            process = self._start(segment, outcome, stdout=fd)
        except SpawnError as exc:
            outcome.error = exc
            return outcome
        finally:
            os.close(fd)
        if process is not None:
            self._reap(process, outcome)
        return outcome
