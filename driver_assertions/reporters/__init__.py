"""Reporter modules for driver assertions.

This package provides result reporting in various formats for
human consumption and CI/CD integration.
"""

from .base import CollectingReporter, Reporter
from .json_reporter import JSONReporter
from .terminal_reporter import TerminalReporter


__all__ = [
    "Reporter",
    "CollectingReporter",
    "TerminalReporter",
    "JSONReporter",
]
