"""Scenario: the outer handle a test author works with.

A scenario wraps one session. Checks are reached through ``assert_``;
outside a chain they return the scenario again (bound to the check just
issued, so an attachment can follow). Nothing touches the driver until
``run()`` issues the queued commands; answers are judged as the driver emits
them on the stream, and ``done()`` closes the books.

Example::

    scenario = Scenario.create(driver, stream=driver.messages)
    scenario.assert_.exists("#nav", "nav present")
    scenario.assert_.number_of_elements("#blog .teaser").is_(4, "four teasers")
    await scenario.run()
    ...                      # driver answers arrive
    counters = scenario.done()
"""

import logging
from typing import Any, Optional

from .assertions import Assertions, Handle
from .config import AssertionsConfig
from .models import CheckDescriptor, Counters
from .reporters import Reporter
from .services import AttachmentOperator, MessageStream
from .session import Session

logger = logging.getLogger(__name__)


class Scenario:
    """Outer test handle."""

    def __init__(self, session: Session, last_check: Optional[CheckDescriptor] = None):
        self._session = session
        self._last_check = last_check
        if not session.has_root:
            session.attach_root(self)

    @classmethod
    def create(
        cls,
        driver: Any,
        stream: Optional[MessageStream] = None,
        reporter: Optional[Reporter] = None,
        config: Optional[AssertionsConfig] = None,
    ) -> "Scenario":
        """Create a scenario with a fresh session.

        Args:
            driver: Browser-automation driver
            stream: Message stream the driver answers on (default: new stream)
            reporter: Report sink (default: CollectingReporter)
            config: Session configuration

        Returns:
            The root scenario handle
        """
        return cls(Session(driver, stream=stream, reporter=reporter, config=config))

    def bound(self, descriptor: Optional[CheckDescriptor]) -> "Scenario":
        """A handle on the same session, bound to ``descriptor``."""
        return Scenario(self._session, descriptor)

    @property
    def assert_(self) -> Assertions:
        return Assertions(self._session, self._last_check)

    @property
    def session(self) -> Session:
        return self._session

    @property
    def is_root(self) -> bool:
        return self._session.root is self

    @property
    def last_check(self) -> Optional[CheckDescriptor]:
        return self._last_check

    @property
    def stream(self) -> MessageStream:
        return self._session.stream

    @property
    def counters(self) -> Counters:
        return self._session.counters

    @property
    def expectations(self) -> int:
        return self._session.counters.expectations_total

    @property
    def failures(self) -> int:
        return self._session.counters.failures_total

    def query(self, selector: str) -> "Scenario":
        """Reuse ``selector`` for the following selector-based checks until ``end()``."""
        self._session.open_query(selector)
        return self

    def end(self) -> "Scenario":
        """Terminate the innermost chain or query."""
        self._session.close_frame()
        return self._session.root

    # Comparator attachments on the check this handle is bound to

    def is_(self, expected: Any, message: Optional[str] = None) -> Handle:
        return self.assert_._attach(AttachmentOperator.IS, expected, message)

    def not_(self, expected: Any, message: Optional[str] = None) -> Handle:
        return self.assert_._attach(AttachmentOperator.NOT, expected, message)

    def between(self, expected: Any, message: Optional[str] = None) -> Handle:
        return self.assert_._attach(AttachmentOperator.BETWEEN, expected, message)

    def gt(self, expected: Any, message: Optional[str] = None) -> Handle:
        return self.assert_._attach(AttachmentOperator.GT, expected, message)

    def gte(self, expected: Any, message: Optional[str] = None) -> Handle:
        return self.assert_._attach(AttachmentOperator.GTE, expected, message)

    def lt(self, expected: Any, message: Optional[str] = None) -> Handle:
        return self.assert_._attach(AttachmentOperator.LT, expected, message)

    def lte(self, expected: Any, message: Optional[str] = None) -> Handle:
        return self.assert_._attach(AttachmentOperator.LTE, expected, message)

    # Lifecycle

    async def run(self) -> int:
        """Issue every queued driver command in call order.

        Returns once all commands are issued; answers may still be
        outstanding.

        Returns:
            Number of queued actions executed
        """
        return await self._session.run()

    def done(self) -> Counters:
        """Release held reports, log unanswered checks and return the counters."""
        return self._session.finish()

    def __repr__(self) -> str:
        bound = self._last_check.check if self._last_check else None
        return (
            f"Scenario(expectations={self.expectations}, failures={self.failures}, "
            f"last_check={bound})"
        )
