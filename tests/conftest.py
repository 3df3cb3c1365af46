from __future__ import annotations

import signal
from pathlib import Path

import pytest

from pesh.core.builtins import WorkingDirectory
from pesh.core.signals import INTERACTIVE_SIGNALS
from pesh.core.supervisor import Supervisor


@pytest.fixture
def supervisor(tmp_path: Path) -> Supervisor:
    return Supervisor(WorkingDirectory(tmp_path))


@pytest.fixture(autouse=True)
def _restore_signal_dispositions():
    previous = {signum: signal.getsignal(signum) for signum in INTERACTIVE_SIGNALS}
    yield
    for signum, handler in previous.items():
        signal.signal(signum, handler)
