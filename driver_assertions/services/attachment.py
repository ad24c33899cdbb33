"""Comparator attachment.

An attachment (``is_``, ``not_``, ``between``, ``gt``, ``gte``, ``lt``,
``lte``) judges the value fetched by the check it follows, without issuing a
new driver command. It listens for the same answer message as that check and
reports at most once per (identifier, operator) pair, however many times the
message is delivered.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional, Set, Tuple

from .. import comparators
from ..models import CheckDescriptor, DriverMessage, ReportEvent
from .message_stream import MessageStream

logger = logging.getLogger(__name__)

# Receives the attachment's report slot and its report (None if nothing to report)
SettleCallback = Callable[[int, Optional[ReportEvent]], None]


class AttachmentOperator(str, Enum):
    """Operators that can be attached to the preceding check."""
    IS = "is"
    NOT = "not"
    BETWEEN = "between"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"


_COMPARATORS = {
    AttachmentOperator.IS: comparators.shallow_equals,
    AttachmentOperator.NOT: comparators.shallow_equals,
    AttachmentOperator.BETWEEN: comparators.between,
    AttachmentOperator.GT: comparators.greater_than,
    AttachmentOperator.GTE: comparators.greater_than_equal,
    AttachmentOperator.LT: comparators.lower_than,
    AttachmentOperator.LTE: comparators.lower_than_equal,
}

_NEGATED = frozenset({AttachmentOperator.NOT})


def evaluate(operator: AttachmentOperator, expected: Any, actual: Any) -> bool:
    """Judge an answered value with an attachment operator.

    Args:
        operator: Attachment operator
        expected: Value given to the attachment (a [low, high] pair for BETWEEN)
        actual: Value the driver answered with

    Returns:
        Comparison result, negated for NOT; faults count as False before negation
    """
    try:
        result = bool(_COMPARATORS[operator](expected, actual))
    except Exception as e:
        logger.warning(f"Attachment {operator.value} raised on {actual!r}: {e}")
        result = False
    if operator in _NEGATED:
        result = not result
    return result


class ProceededSet:
    """(identifier, operator) pairs that already reported."""

    def __init__(self) -> None:
        self._pairs: Set[Tuple[str, str]] = set()

    def claim(self, identifier: str, operator: AttachmentOperator) -> bool:
        """Mark a pair as proceeded.

        Returns:
            True if the pair was not proceeded before this call
        """
        pair = (identifier, operator.value)
        if pair in self._pairs:
            return False
        self._pairs.add(pair)
        return True

    def __contains__(self, pair: Tuple[str, str]) -> bool:
        return pair in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)


class AttachmentListener:
    """One-shot stream listener judging a check's answer with an operator."""

    def __init__(
        self,
        descriptor: CheckDescriptor,
        operator: AttachmentOperator,
        expected: Any,
        message: Optional[str],
        sequence: int,
        stream: MessageStream,
        proceeded: ProceededSet,
        settle: SettleCallback,
    ):
        self.descriptor = descriptor
        self.operator = operator
        self.expected = expected
        self.message = message
        self.sequence = sequence
        self.fired = False
        self._stream = stream
        self._proceeded = proceeded
        self._settle = settle

    def matches(self, message: DriverMessage) -> bool:
        return (
            message.identifier == self.descriptor.identifier
            and message.key == self.descriptor.semantic_key
        )

    def __call__(self, message: DriverMessage) -> None:
        if self.fired or not self.matches(message):
            return
        self.fired = True
        self._stream.unsubscribe(self)

        identifier = self.descriptor.identifier
        if not self._proceeded.claim(identifier, self.operator):
            logger.debug(
                f"Attachment {self.operator.value} already reported for {identifier}, skipping"
            )
            self._settle(self.sequence, None)
            return

        success = evaluate(self.operator, self.expected, message.value)
        report = ReportEvent(
            success=success,
            expected=self.expected,
            value=message.value,
            message=self.message,
            type=self.descriptor.report_type,
            identifier=identifier,
        )
        logger.debug(f"Attachment {self.operator.value} on {identifier}: success={success}")
        self._settle(self.sequence, report)

    def __repr__(self) -> str:
        state = "fired" if self.fired else "pending"
        return f"AttachmentListener({self.operator.value} on {self.descriptor.identifier} {state})"
