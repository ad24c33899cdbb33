"""Correlation registry for pending checks.

This module pairs every check with the one driver answer that belongs to it.
Each registered check gets a fresh identifier and a one-shot listener; the
identifier travels to the driver as the last positional argument of the
command and comes back on the answer message. Many checks can be in flight on
the single shared stream, so a listener only accepts a message whose semantic
key AND identifier both match.
"""

import logging
import uuid
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Set, Tuple

from ..constants import VALUE_PRESENCE_KEYS
from ..models import CheckDescriptor, DriverMessage, RegistryStats, ReportEvent
from .message_stream import MessageStream

logger = logging.getLogger(__name__)

Comparator = Callable[[Any, Any], bool]

# Called once per answered check; report is None when comparison was suppressed
ResolutionCallback = Callable[[CheckDescriptor, Optional[ReportEvent]], None]


class CheckListener:
    """One-shot stream listener for a single check.

    Fires on the first message matching its descriptor, then unsubscribes
    itself through the registry. Later deliveries of the same message are
    ignored.
    """

    def __init__(self, registry: "CorrelationRegistry", descriptor: CheckDescriptor):
        self.descriptor = descriptor
        self.fired = False
        self._registry = registry

    def matches(self, message: DriverMessage) -> bool:
        return (
            message.key == self.descriptor.semantic_key
            and message.identifier == self.descriptor.identifier
        )

    def __call__(self, message: DriverMessage) -> None:
        if self.fired or not self.matches(message):
            return
        self.fired = True
        self._registry._resolve(self, message)

    def __repr__(self) -> str:
        state = "fired" if self.fired else "pending"
        return f"CheckListener({self.descriptor.semantic_key}/{self.descriptor.identifier} {state})"


class CorrelationRegistry:
    """
    Mints identifiers, tracks pending checks and evaluates their answers.

    Answers are kept after resolution so that a comparator attached to an
    already-answered check can still be judged against its value.
    """

    def __init__(
        self,
        stream: MessageStream,
        on_resolved: ResolutionCallback,
        suppress_absent_expected: bool = True,
        value_presence_keys: FrozenSet[str] = VALUE_PRESENCE_KEYS,
    ):
        """
        Initialize correlation registry.

        Args:
            stream: Shared message stream listeners subscribe to
            on_resolved: Callback receiving each answered check and its report
            suppress_absent_expected: Skip comparison for value-presence kinds
                called without an expected value
            value_presence_keys: Semantic keys the suppression applies to
        """
        self._stream = stream
        self._on_resolved = on_resolved
        self._suppress_absent_expected = suppress_absent_expected
        self._value_presence_keys = value_presence_keys

        self._pending: Dict[str, CheckListener] = {}
        self._answers: Dict[str, DriverMessage] = {}
        self._abandoned: Set[str] = set()

        # Statistics counters
        self._total_registered = 0
        self._total_answered = 0
        self._total_suppressed = 0
        self._total_abandoned = 0

    def new_identifier(self) -> str:
        """Return an identifier not used by any check of this run."""
        identifier = str(uuid.uuid4())
        while identifier in self._pending or identifier in self._answers:
            identifier = str(uuid.uuid4())
        return identifier

    def register(
        self,
        semantic_key: str,
        report_type: str,
        comparator: Comparator,
        expected: Any,
        message: Optional[str],
        *,
        check: str,
        sequence: int,
        selector: Optional[str] = None,
        arguments: Optional[Dict[str, Any]] = None,
    ) -> Tuple[CheckDescriptor, CheckListener]:
        """
        Register a check awaiting its driver answer.

        The listener is not subscribed yet; the queued action subscribes it
        right before issuing the driver command.

        Args:
            semantic_key: Key the driver answers with
            report_type: Type reported for this check
            comparator: Predicate called as comparator(actual, expected)
            expected: Expected value
            message: Message for the reporter
            check: Public check name
            sequence: Report slot reserved for this check
            selector: Selector the check targets, if any
            arguments: Extra named driver arguments

        Returns:
            Tuple of (descriptor, listener)
        """
        descriptor = CheckDescriptor(
            identifier=self.new_identifier(),
            check=check,
            semantic_key=semantic_key,
            report_type=report_type,
            comparator=comparator,
            expected=expected,
            selector=selector,
            message=message,
            arguments=arguments or {},
            sequence=sequence,
        )
        listener = CheckListener(self, descriptor)
        self._pending[descriptor.identifier] = listener
        self._total_registered += 1

        logger.debug(
            f"Registered check {check} → {semantic_key}/{descriptor.identifier} "
            f"(expected={expected!r}, selector={selector!r})"
        )
        return descriptor, listener

    def subscribe(self, listener: CheckListener) -> None:
        """Put a registered listener on the stream."""
        self._stream.subscribe(listener)

    def is_suppressed(self, descriptor: CheckDescriptor) -> bool:
        """Whether the answer to this check is recorded without comparison."""
        # Falsy-but-valid expectations (0, "", False) are suppressed as well
        return (
            self._suppress_absent_expected
            and not descriptor.expected
            and descriptor.semantic_key in self._value_presence_keys
        )

    @staticmethod
    def compare(comparator: Comparator, a: Any, b: Any) -> bool:
        """Evaluate a comparator, treating any fault as a mismatch."""
        try:
            return bool(comparator(a, b))
        except Exception as e:
            logger.warning(f"Comparator {getattr(comparator, '__name__', comparator)} raised: {e}")
            return False

    def _resolve(self, listener: CheckListener, message: DriverMessage) -> None:
        descriptor = listener.descriptor
        self._stream.unsubscribe(listener)
        self._pending.pop(descriptor.identifier, None)
        self._answers[descriptor.identifier] = message
        self._total_answered += 1

        if self.is_suppressed(descriptor):
            self._total_suppressed += 1
            logger.debug(
                f"Answer for {descriptor.check}/{descriptor.identifier} recorded "
                f"without comparison (value={message.value!r})"
            )
            self._on_resolved(descriptor, None)
            return

        success = self.compare(descriptor.comparator, message.value, descriptor.expected)
        report = ReportEvent(
            success=success,
            expected=descriptor.expected,
            value=message.value,
            message=descriptor.message,
            type=descriptor.report_type,
            identifier=descriptor.identifier,
        )
        logger.debug(f"Resolved {descriptor.check}/{descriptor.identifier}: success={success}")
        self._on_resolved(descriptor, report)

    def answer(self, identifier: str) -> Optional[DriverMessage]:
        """Return the recorded answer for a check, if it has arrived."""
        return self._answers.get(identifier)

    def abandon(self, descriptor: CheckDescriptor) -> bool:
        """Drop a pending check whose driver command could not be issued.

        Returns:
            True if the check was still pending
        """
        listener = self._pending.pop(descriptor.identifier, None)
        if listener is None:
            return False
        self._stream.unsubscribe(listener)
        self._abandoned.add(descriptor.identifier)
        self._total_abandoned += 1
        logger.warning(f"Abandoned check {descriptor.check}/{descriptor.identifier}")
        return True

    def is_abandoned(self, identifier: str) -> bool:
        """Whether the check was dropped and will never be answered."""
        return identifier in self._abandoned

    def get_stats(self) -> RegistryStats:
        """
        Get registry statistics for diagnostics.

        Returns:
            RegistryStats with current state and historical counters
        """
        return RegistryStats(
            total_registered=self._total_registered,
            total_answered=self._total_answered,
            total_suppressed=self._total_suppressed,
            total_abandoned=self._total_abandoned,
            pending=len(self._pending),
            subscribed_listeners=self._stream.listener_count,
        )

    def get_pending_checks(self) -> List[Dict[str, Any]]:
        """
        Get checks still awaiting an answer, for debugging.

        Returns:
            List of pending check dictionaries in registration order
        """
        return [
            {
                "identifier": identifier,
                "check": listener.descriptor.check,
                "semantic_key": listener.descriptor.semantic_key,
                "selector": listener.descriptor.selector,
                "message": listener.descriptor.message,
                "subscribed": listener in self._stream,
            }
            for identifier, listener in self._pending.items()
        ]
