"""pesh - a small operator-driven command interpreter."""

from .core import Category, CommandSet, Parser, Supervisor, parse_line

__version__ = "0.1.0"

__all__ = ["Category", "CommandSet", "Parser", "Supervisor", "parse_line"]
