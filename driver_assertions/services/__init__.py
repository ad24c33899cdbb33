"""Services behind the assertion session.

- message_stream: shared broadcast channel for driver answers
- correlation_registry: identifiers, one-shot check listeners, answer evaluation
- action_queue: sequential issuance of driver commands
- chain_state: immutable chain/query stack
- attachment: comparator attachment operators and listeners
- report_sequencer: arrival- or issuance-ordered report release
"""

from .action_queue import ActionQueue
from .attachment import AttachmentListener, AttachmentOperator, ProceededSet, evaluate
from .chain_state import ChainFrame, ChainStack
from .correlation_registry import CheckListener, CorrelationRegistry
from .message_stream import MessageStream
from .report_sequencer import ReportSequencer

__all__ = [
    "ActionQueue",
    "AttachmentListener",
    "AttachmentOperator",
    "ChainFrame",
    "ChainStack",
    "CheckListener",
    "CorrelationRegistry",
    "MessageStream",
    "ProceededSet",
    "ReportSequencer",
    "evaluate",
]
