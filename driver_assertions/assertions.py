"""Assertion checks.

Assertions check whether the assumptions made about a page are correct: the
title of a page, the text of an element, how many teasers are visible, and so
on. Every check issues one driver query and is judged when the driver's answer
arrives; nothing is evaluated at call time.

Three styles compose freely::

    scenario.assert_.text("#nav", "Navigation", "nav text")

    (scenario.assert_.chain()
        .text("#nav").is_("Navigation")
        .visible("#nav")
        .attr("#nav", "data-nav", "true")
     .end())

    (scenario.assert_.chain()
        .query("#nav")
            .text().is_("Navigation")
            .visible()
            .attr("data-nav", "true")
        .end()
     .end())

While a query is open, selector-based checks take the query's selector and
every other positional argument moves one place to the left.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from .checks import CHECK_KINDS
from .models import CheckDescriptor
from .services import AttachmentOperator

if TYPE_CHECKING:
    from .scenario import Scenario
    from .session import Session

logger = logging.getLogger(__name__)

Handle = Union["Assertions", "Scenario"]


class Assertions:
    """Chain handle exposing every check.

    A handle is bound to the check that produced it (``last_check``); the
    comparator attachments ``is_``, ``not_``, ``between``, ``gt``, ``gte``,
    ``lt`` and ``lte`` judge that check's answer.
    """

    def __init__(self, session: "Session", last_check: Optional[CheckDescriptor] = None):
        self._session = session
        self._last_check = last_check

    @property
    def session(self) -> "Session":
        return self._session

    @property
    def last_check(self) -> Optional[CheckDescriptor]:
        """Descriptor of the check this handle was returned from."""
        return self._last_check

    # Chain / query control

    def chain(self) -> "Assertions":
        """Open an assertion chain.

        Until the matching ``end()``, every check returns this chain handle
        instead of the scenario, so consecutive checks need no ``assert_``
        prefix. Always terminate the chain with ``end()``.
        """
        self._session.open_chain()
        return self

    def query(self, selector: str) -> "Assertions":
        """Reuse ``selector`` for the following checks until ``end()``."""
        self._session.open_query(selector)
        return self

    def end(self) -> "Scenario":
        """Terminate the innermost chain or query.

        Returns:
            The scenario; calling end() with nothing open is a no-op
        """
        self._session.close_frame()
        return self._session.root

    # Internals

    def _check(self, name: str, *values: Any) -> Handle:
        kind = CHECK_KINDS[name]
        descriptor = self._session.issue(kind, values)

        stack = self._session.chain_stack
        if stack.chaining or (kind.chain_on_query and stack.querying):
            return Assertions(self._session, descriptor)
        return self._session.root.bound(descriptor)

    def _attach(self, operator: AttachmentOperator, expected: Any, message: Optional[str]) -> Handle:
        self._session.attach(self._last_check, operator, expected, message)
        if self._session.chain_stack.chaining:
            return Assertions(self._session, self._last_check)
        return self._session.root.bound(self._last_check)

    # Presence and visibility

    def exists(self, selector: Optional[str] = None, message: Optional[str] = None) -> Handle:
        """Assert that an element matching the selector exists in the DOM."""
        return self._check("exists", selector, message)

    def doesnt_exist(self, selector: Optional[str] = None, message: Optional[str] = None) -> Handle:
        """Assert that no element matches the selector."""
        return self._check("doesnt_exist", selector, message)

    def visible(self, selector: Optional[str] = None, message: Optional[str] = None) -> Handle:
        """Assert that the element is visible."""
        return self._check("visible", selector, message)

    def not_visible(self, selector: Optional[str] = None, message: Optional[str] = None) -> Handle:
        """Assert that the element is not visible."""
        return self._check("not_visible", selector, message)

    # Element values

    def text(
        self,
        selector: Optional[str] = None,
        expected: Any = None,
        message: Optional[str] = None,
    ) -> Handle:
        """Assert that an element has the expected text.

        Without an expected value no comparison is made; follow up with an
        attachment instead::

            scenario.assert_.text("#nav").is_("Navigation", "nav text")

        Unlike most checks, ``text`` keeps returning the chain handle inside a
        query that is not part of a chain, so the attachment is reachable.
        """
        return self._check("text", selector, expected, message)

    def doesnt_have_text(
        self,
        selector: Optional[str] = None,
        expected: Any = None,
        message: Optional[str] = None,
    ) -> Handle:
        """Assert that an element's text differs from ``expected``."""
        return self._check("doesnt_have_text", selector, expected, message)

    def val(
        self,
        selector: Optional[str] = None,
        expected: Any = None,
        message: Optional[str] = None,
    ) -> Handle:
        """Assert that a form field has the expected value.

        Works for every element holding a value attribute: inputs, textareas
        and selects (the value of the selected option). The expected value is
        compared locally; only the selector is sent to the driver.
        """
        return self._check("val", selector, expected, message)

    def css(
        self,
        selector: Optional[str] = None,
        property: Optional[str] = None,
        expected: Any = None,
        message: Optional[str] = None,
    ) -> Handle:
        """Assert that a computed CSS property has the expected value."""
        return self._check("css", selector, property, expected, message)

    def width(
        self,
        selector: Optional[str] = None,
        expected: Any = None,
        message: Optional[str] = None,
    ) -> Handle:
        return self._check("width", selector, expected, message)

    def height(
        self,
        selector: Optional[str] = None,
        expected: Any = None,
        message: Optional[str] = None,
    ) -> Handle:
        return self._check("height", selector, expected, message)

    def attr(
        self,
        selector: Optional[str] = None,
        attribute: Optional[str] = None,
        expected: Any = None,
        message: Optional[str] = None,
    ) -> Handle:
        """Assert that an element attribute has the expected value."""
        return self._check("attr", selector, attribute, expected, message)

    # Form state

    def selected(self, selector: Optional[str] = None, message: Optional[str] = None) -> Handle:
        """Assert that a checkbox, radio or option is selected."""
        return self._check("selected", selector, message)

    def not_selected(self, selector: Optional[str] = None, message: Optional[str] = None) -> Handle:
        return self._check("not_selected", selector, message)

    def enabled(self, selector: Optional[str] = None, message: Optional[str] = None) -> Handle:
        """Assert that a form element is enabled."""
        return self._check("enabled", selector, message)

    def disabled(self, selector: Optional[str] = None, message: Optional[str] = None) -> Handle:
        return self._check("disabled", selector, message)

    # Element counts

    def number_of_elements(
        self,
        selector: Optional[str] = None,
        expected: Any = None,
        message: Optional[str] = None,
    ) -> Handle:
        """Assert that a selector matches n elements.

        Given four ``article.teaser`` elements in ``#blog-overview``::

            scenario.assert_.number_of_elements("#blog-overview .teaser", 4, "4 teasers")

        or, with an attachment::

            scenario.assert_.number_of_elements("#blog-overview .teaser").is_(4, "4 teasers")
            scenario.assert_.number_of_elements("#blog-overview .teaser").between([2, 6])
            scenario.assert_.number_of_elements("#blog-overview .teaser").gte(2)

        An expected count of 0 is indistinguishable from no expected count and
        skips the comparison; use ``is_(0)`` to assert absence.
        """
        return self._check("number_of_elements", selector, expected, message)

    def number_of_visible_elements(
        self,
        selector: Optional[str] = None,
        expected: Any = None,
        message: Optional[str] = None,
    ) -> Handle:
        """Assert that n elements matching the selector are visible in the viewport."""
        return self._check("number_of_visible_elements", selector, expected, message)

    # Page level

    def cookie(self, name: str, expected: Any = None, message: Optional[str] = None) -> Handle:
        """Assert that the cookie ``name`` has the expected value."""
        return self._check("cookie", name, expected, message)

    def http_status(self, status: Any = None, message: Optional[str] = None) -> Handle:
        """Assert the HTTP status code of the current page."""
        return self._check("http_status", status, message)

    def title(self, expected: Any = None, message: Optional[str] = None) -> Handle:
        return self._check("title", expected, message)

    def doesnt_have_title(self, expected: Any = None, message: Optional[str] = None) -> Handle:
        return self._check("doesnt_have_title", expected, message)

    def url(self, expected: Any = None, message: Optional[str] = None) -> Handle:
        return self._check("url", expected, message)

    def doesnt_have_url(self, expected: Any = None, message: Optional[str] = None) -> Handle:
        return self._check("doesnt_have_url", expected, message)

    def dialog_text(self, expected: Any = None, message: Optional[str] = None) -> Handle:
        """Assert the text of the open alert, confirm or prompt dialog."""
        return self._check("dialog_text", expected, message)

    def dialog_doesnt_have_text(self, expected: Any = None, message: Optional[str] = None) -> Handle:
        return self._check("dialog_doesnt_have_text", expected, message)

    def resource_exists(self, url: str, message: Optional[str] = None) -> Handle:
        """Assert that a resource (script, stylesheet, image ...) can be loaded."""
        return self._check("resource_exists", url, message)

    # Comparator attachments

    def is_(self, expected: Any, message: Optional[str] = None) -> Handle:
        """Assert that the preceding check's value equals ``expected``."""
        return self._attach(AttachmentOperator.IS, expected, message)

    def not_(self, expected: Any, message: Optional[str] = None) -> Handle:
        """Assert that the preceding check's value differs from ``expected``."""
        return self._attach(AttachmentOperator.NOT, expected, message)

    def between(self, expected: Any, message: Optional[str] = None) -> Handle:
        """Assert that the value lies within ``[low, high]``, inclusive."""
        return self._attach(AttachmentOperator.BETWEEN, expected, message)

    def gt(self, expected: Any, message: Optional[str] = None) -> Handle:
        return self._attach(AttachmentOperator.GT, expected, message)

    def gte(self, expected: Any, message: Optional[str] = None) -> Handle:
        return self._attach(AttachmentOperator.GTE, expected, message)

    def lt(self, expected: Any, message: Optional[str] = None) -> Handle:
        return self._attach(AttachmentOperator.LT, expected, message)

    def lte(self, expected: Any, message: Optional[str] = None) -> Handle:
        return self._attach(AttachmentOperator.LTE, expected, message)

    def __repr__(self) -> str:
        bound = self._last_check.check if self._last_check else None
        return f"Assertions(state={self._session.chain_stack.state.value}, last_check={bound})"
