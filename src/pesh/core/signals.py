"""Signal dispositions for the interpreter and its children."""

from __future__ import annotations

import contextlib
import signal
from collections.abc import Iterator

INTERACTIVE_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTSTP)


def ignore_interactive_signals() -> None:
    """Keep Ctrl-C and Ctrl-Z from interrupting or suspending the interpreter."""
    for signum in INTERACTIVE_SIGNALS:
        signal.signal(signum, signal.SIG_IGN)


def restore_default_signals() -> None:
    """Pre-launch hook run in the child before the program image replaces it.

    Ignored dispositions survive exec, so they must be reset here for the
    program to be interruptible from the terminal.
    """
    for signum in INTERACTIVE_SIGNALS:
        signal.signal(signum, signal.SIG_DFL)


@contextlib.contextmanager
def interactive_signals_ignored() -> Iterator[None]:
    """Ignore interactive signals for the duration of the block."""
    previous = {signum: signal.getsignal(signum) for signum in INTERACTIVE_SIGNALS}
    ignore_interactive_signals()
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
