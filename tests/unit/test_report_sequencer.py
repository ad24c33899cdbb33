"""Unit tests for report sequencing."""

from driver_assertions.config import ResolutionOrder
from driver_assertions.models import ReportEvent
from driver_assertions.services import ReportSequencer


def event(name, success=True):
    return ReportEvent(success=success, type="exists", message=name)


class TestArrivalOrder:
    """Test immediate release."""

    def test_reports_emitted_on_fulfil(self):
        sink = []
        sequencer = ReportSequencer(sink.append)
        first, second = sequencer.reserve(), sequencer.reserve()

        sequencer.fulfil(second, event("second"))
        sequencer.fulfil(first, event("first"))

        assert [e.message for e in sink] == ["second", "first"]
        assert sequencer.flush() == 0

    def test_empty_slot_emits_nothing(self):
        sink = []
        sequencer = ReportSequencer(sink.append)
        sequencer.fulfil(sequencer.reserve(), None)
        assert sink == []


class TestIssuanceOrder:
    """Test holding reports until earlier slots are fulfilled."""

    def test_reports_held_until_gap_filled(self):
        sink = []
        sequencer = ReportSequencer(sink.append, ResolutionOrder.ISSUANCE)
        first, second, third = (sequencer.reserve() for _ in range(3))

        sequencer.fulfil(third, event("third"))
        sequencer.fulfil(second, event("second"))
        assert sink == []
        assert sequencer.held_count == 2

        sequencer.fulfil(first, event("first"))
        assert [e.message for e in sink] == ["first", "second", "third"]
        assert sequencer.held_count == 0

    def test_empty_slot_releases_followers(self):
        sink = []
        sequencer = ReportSequencer(sink.append, ResolutionOrder.ISSUANCE)
        first, second = sequencer.reserve(), sequencer.reserve()

        sequencer.fulfil(second, event("second"))
        sequencer.fulfil(first, None)

        assert [e.message for e in sink] == ["second"]

    def test_duplicate_fulfil_ignored(self):
        sink = []
        sequencer = ReportSequencer(sink.append, ResolutionOrder.ISSUANCE)
        slot = sequencer.reserve()

        sequencer.fulfil(slot, event("once"))
        sequencer.fulfil(slot, event("twice"))

        assert [e.message for e in sink] == ["once"]

    def test_flush_skips_unanswered_slots(self):
        sink = []
        sequencer = ReportSequencer(sink.append, ResolutionOrder.ISSUANCE)
        first, second = sequencer.reserve(), sequencer.reserve()
        sequencer.fulfil(second, event("second"))

        assert sequencer.flush() == 1
        assert [e.message for e in sink] == ["second"]

        # A late answer for the skipped slot is still reported
        sequencer.fulfil(first, event("late"))
        assert [e.message for e in sink] == ["second", "late"]
