"""
Unit tests for comparator attachments.

Tests operator evaluation, the proceeded set and the at-most-once
reporting of an attachment listener.
"""

import pytest

from driver_assertions import comparators
from driver_assertions.models import CheckDescriptor, DriverMessage
from driver_assertions.services import (
    AttachmentListener,
    AttachmentOperator,
    MessageStream,
    ProceededSet,
    evaluate,
)


@pytest.fixture
def descriptor():
    return CheckDescriptor(
        identifier="id-teaser",
        check="number_of_elements",
        semantic_key="numberOfElements",
        report_type="numberOfElements",
        comparator=comparators.shallow_equals,
        selector="#blog .teaser",
        sequence=0,
    )


class TestEvaluate:
    """Test each operator against an answered value."""

    @pytest.mark.parametrize("operator,expected,actual,result", [
        (AttachmentOperator.IS, 4, 4, True),
        (AttachmentOperator.IS, 4, "4", True),
        (AttachmentOperator.IS, 4, 3, False),
        (AttachmentOperator.NOT, 4, 3, True),
        (AttachmentOperator.NOT, 4, "4", False),
        (AttachmentOperator.BETWEEN, [2, 6], 6, True),
        (AttachmentOperator.BETWEEN, [2, 6], 7, False),
        (AttachmentOperator.GT, 2, 3, True),
        (AttachmentOperator.GT, 2, 2, False),
        (AttachmentOperator.GTE, 2, 2, True),
        (AttachmentOperator.LT, 5, 4, True),
        (AttachmentOperator.LTE, 5, 5, True),
        (AttachmentOperator.LTE, 5, 6, False),
    ])
    def test_operator(self, operator, expected, actual, result):
        assert evaluate(operator, expected, actual) is result

    def test_not_comparable_is_false(self):
        assert evaluate(AttachmentOperator.GT, 2, "many") is False


class TestProceededSet:

    def test_claim_once(self):
        proceeded = ProceededSet()

        assert proceeded.claim("id-1", AttachmentOperator.IS) is True
        assert proceeded.claim("id-1", AttachmentOperator.IS) is False
        assert proceeded.claim("id-1", AttachmentOperator.GT) is True
        assert ("id-1", "is") in proceeded
        assert len(proceeded) == 2


class TestAttachmentListener:
    """Test at-most-once reporting."""

    def make_listener(self, descriptor, stream, proceeded, settled,
                      operator=AttachmentOperator.IS, expected=4, sequence=1):
        listener = AttachmentListener(
            descriptor, operator, expected, "four teasers", sequence,
            stream, proceeded, lambda slot, report: settled.append((slot, report)),
        )
        stream.subscribe(listener)
        return listener

    def test_reports_once_on_duplicate_delivery(self, descriptor):
        stream, proceeded, settled = MessageStream(), ProceededSet(), []
        listener = self.make_listener(descriptor, stream, proceeded, settled)
        message = DriverMessage(key="numberOfElements", identifier="id-teaser", value=3)

        stream.emit(message)
        stream.emit(message)

        assert len(settled) == 1
        slot, report = settled[0]
        assert slot == 1
        assert report.success is False
        assert report.expected == 4
        assert report.value == 3
        assert report.message == "four teasers"
        assert report.type == "numberOfElements"
        assert listener not in stream

    def test_ignores_other_checks(self, descriptor):
        stream, proceeded, settled = MessageStream(), ProceededSet(), []
        self.make_listener(descriptor, stream, proceeded, settled)

        stream.emit({"key": "numberOfElements", "identifier": "other", "value": 4})
        stream.emit({"key": "exists", "identifier": "id-teaser", "value": 4})

        assert settled == []

    def test_same_operator_twice_reports_once(self, descriptor):
        """Test that a second identical attachment settles its slot empty."""
        stream, proceeded, settled = MessageStream(), ProceededSet(), []
        self.make_listener(descriptor, stream, proceeded, settled, sequence=1)
        self.make_listener(descriptor, stream, proceeded, settled, sequence=2)

        stream.emit({"key": "numberOfElements", "identifier": "id-teaser", "value": 4})

        assert [slot for slot, _ in settled] == [1, 2]
        assert settled[0][1].success is True
        assert settled[1][1] is None

    def test_different_operators_both_report(self, descriptor):
        stream, proceeded, settled = MessageStream(), ProceededSet(), []
        self.make_listener(descriptor, stream, proceeded, settled)
        self.make_listener(descriptor, stream, proceeded, settled,
                           operator=AttachmentOperator.BETWEEN, expected=[2, 6], sequence=2)

        stream.emit({"key": "numberOfElements", "identifier": "id-teaser", "value": 4})

        assert [report.success for _, report in settled] == [True, True]
