"""Report sequencing between resolution and the reporter.

Every check or attachment call reserves a slot when it is made. When its
answer is evaluated the slot is fulfilled with a report, or with nothing if
the comparison was suppressed or the check was abandoned.

In ARRIVAL order a report is emitted the moment its slot is fulfilled. In
ISSUANCE order reports are held back until every earlier slot is fulfilled, so
the reporter sees them in call order; an unanswered check holds back everything
after it until ``flush()``.
"""

import logging
from typing import Callable, Dict, Optional, Set

from ..config import ResolutionOrder
from ..models import ReportEvent

logger = logging.getLogger(__name__)

Sink = Callable[[ReportEvent], None]


class ReportSequencer:
    """Releases report events to a sink in the configured order."""

    def __init__(self, sink: Sink, order: ResolutionOrder = ResolutionOrder.ARRIVAL):
        self._sink = sink
        self.order = order
        self._next_slot = 0
        self._next_release = 0
        self._held: Dict[int, Optional[ReportEvent]] = {}
        self._skipped: Set[int] = set()

    def reserve(self) -> int:
        """Reserve the next slot."""
        slot = self._next_slot
        self._next_slot += 1
        return slot

    def fulfil(self, slot: int, report: Optional[ReportEvent]) -> None:
        """Fill a slot and release whatever the order allows."""
        if self.order == ResolutionOrder.ARRIVAL:
            if report is not None:
                self._sink(report)
            return

        if slot in self._skipped:
            # Flushed past earlier; release late answers as they come
            self._skipped.discard(slot)
            if report is not None:
                self._sink(report)
            return

        if slot < self._next_release or slot in self._held:
            logger.debug(f"Report slot {slot} already fulfilled, ignoring")
            return

        self._held[slot] = report
        self._release_ready()

    def _release_ready(self) -> None:
        while self._next_release in self._held:
            report = self._held.pop(self._next_release)
            self._next_release += 1
            if report is not None:
                self._sink(report)

    def flush(self) -> int:
        """Emit every held report regardless of gaps.

        Returns:
            Number of unfulfilled slots skipped over
        """
        if self.order == ResolutionOrder.ARRIVAL:
            return 0

        skipped = 0
        while self._next_release < self._next_slot:
            if self._next_release in self._held:
                report = self._held.pop(self._next_release)
                if report is not None:
                    self._sink(report)
            else:
                self._skipped.add(self._next_release)
                skipped += 1
            self._next_release += 1

        if skipped:
            logger.warning(f"Flushed reports past {skipped} unanswered slot(s)")
        return skipped

    @property
    def held_count(self) -> int:
        """Reports waiting for an earlier slot (ISSUANCE order only)."""
        return sum(1 for report in self._held.values() if report is not None)
