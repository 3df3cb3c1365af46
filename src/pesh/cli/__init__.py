"""Command line interface for pesh."""

from .app import app
from .interactive import InteractiveShell

__all__ = ["InteractiveShell", "app"]
