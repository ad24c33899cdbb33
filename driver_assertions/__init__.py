"""
Driver Assertions

Assertions against values produced by an out-of-process browser-automation
driver. Each check issues one driver command and is correlated with the
asynchronous answer that comes back on a shared message stream.
"""

from .assertions import Assertions
from .config import AssertionsConfig, ResolutionOrder, load_config
from .errors import AssertionsError, ConfigurationError, DriverCommandError, ErrorCode
from .models import CheckDescriptor, Counters, DriverMessage, ReportEvent
from .reporters import CollectingReporter, JSONReporter, TerminalReporter
from .scenario import Scenario
from .services import AttachmentOperator, MessageStream
from .session import Session

__version__ = "1.0.0"

__all__ = [
    "Assertions",
    "AssertionsConfig",
    "AssertionsError",
    "AttachmentOperator",
    "CheckDescriptor",
    "CollectingReporter",
    "ConfigurationError",
    "Counters",
    "DriverCommandError",
    "DriverMessage",
    "ErrorCode",
    "JSONReporter",
    "MessageStream",
    "ReportEvent",
    "ResolutionOrder",
    "Scenario",
    "Session",
    "TerminalReporter",
    "load_config",
]
