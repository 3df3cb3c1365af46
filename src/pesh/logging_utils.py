"""Runtime logging helpers."""

from __future__ import annotations

import sys
from typing import Any, Literal

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

LogProfile = Literal["text", "rich"]

TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"


def _handler_config(profile: LogProfile) -> dict[str, Any]:
    if profile == "rich":
        sink = RichHandler(console=Console(stderr=True), show_time=False, show_path=False, markup=False)
        return {"sink": sink, "format": "{message}"}
    return {"sink": sys.stderr, "format": TEXT_FORMAT}


_active: tuple[LogProfile, str] | None = None


def configure_logging(level: str = "WARNING", *, profile: LogProfile = "text") -> None:
    """Route loguru output to a single stderr sink; repeating the active setup is a no-op."""
    global _active
    wanted = (profile, level.upper())
    if wanted != _active:
        handler = _handler_config(profile)
        handler.update(level=wanted[1], backtrace=False, diagnose=False)
        logger.configure(handlers=[handler])
        _active = wanted
