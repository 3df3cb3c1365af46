"""Core parser and process supervisor for pesh."""

from .builtins import WorkingDirectory
from .parser import Parser, parse_line
from .supervisor import Supervisor
from .types import Category, CommandSet, ExecutionReport, Segment, SegmentOutcome

__all__ = [
    "Category",
    "CommandSet",
    "ExecutionReport",
    "Parser",
    "Segment",
    "SegmentOutcome",
    "Supervisor",
    "WorkingDirectory",
    "parse_line",
]
