"""Reporter interface and the in-memory reporter."""

from typing import List, Protocol, runtime_checkable

from ..models import ReportEvent


@runtime_checkable
class Reporter(Protocol):
    """Sink for report events."""

    def emit(self, event: ReportEvent) -> None: ...


class CollectingReporter:
    """Keeps every report event in memory, in the order received."""

    def __init__(self) -> None:
        self.events: List[ReportEvent] = []

    def emit(self, event: ReportEvent) -> None:
        self.events.append(event)

    @property
    def passed(self) -> List[ReportEvent]:
        return [e for e in self.events if e.success]

    @property
    def failed(self) -> List[ReportEvent]:
        return [e for e in self.events if not e.success]

    def clear(self) -> None:
        self.events.clear()

    def __len__(self) -> int:
        return len(self.events)
