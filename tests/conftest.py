"""Pytest configuration for driver assertion tests."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

# Add the project root to the Python path BEFORE test collection
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))

from driver_assertions.checks import CHECK_KINDS  # noqa: E402
from driver_assertions.models import CheckDescriptor, DriverMessage  # noqa: E402
from driver_assertions.reporters import CollectingReporter  # noqa: E402
from driver_assertions.scenario import Scenario  # noqa: E402
from driver_assertions.services import MessageStream  # noqa: E402

# Driver method -> key its answers carry
DRIVER_KEYS: Dict[str, str] = {
    kind.driver_method: kind.semantic_key for kind in CHECK_KINDS.values()
}


class FakeDriver:
    """Records every command; answers on the stream when told to.

    With ``auto_answer`` set, a command whose method has an entry in
    ``answers`` is answered synchronously, before the call returns.
    """

    def __init__(self, stream: MessageStream, auto_answer: bool = False):
        self.stream = stream
        self.auto_answer = auto_answer
        self.answers: Dict[str, Any] = {}
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def _command(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        if self.auto_answer and method in self.answers:
            self.stream.emit({
                "key": DRIVER_KEYS[method],
                "identifier": args[-1],
                "value": self.answers[method],
            })

    def identifiers(self, method: Optional[str] = None) -> List[str]:
        return [args[-1] for name, args in self.calls if method is None or name == method]

    def reply(self, values: Dict[str, Any]) -> None:
        """Answer every recorded command whose method is in ``values``, in call order."""
        for method, args in self.calls:
            if method in values:
                self.stream.emit({
                    "key": DRIVER_KEYS[method],
                    "identifier": args[-1],
                    "value": values[method],
                })

    def commands(self) -> List[Tuple[str, Tuple[Any, ...]]]:
        """Recorded calls without their identifiers."""
        return [(method, args[:-1]) for method, args in self.calls]

    def exists(self, selector, identifier):
        self._command("exists", selector, identifier)

    def visible(self, selector, identifier):
        self._command("visible", selector, identifier)

    def text(self, selector, identifier):
        self._command("text", selector, identifier)

    def val(self, selector, identifier):
        self._command("val", selector, identifier)

    def css(self, selector, property, identifier):
        self._command("css", selector, property, identifier)

    def width(self, selector, identifier):
        self._command("width", selector, identifier)

    def height(self, selector, identifier):
        self._command("height", selector, identifier)

    def selected(self, selector, flag, identifier):
        self._command("selected", selector, flag, identifier)

    def enabled(self, selector, flag, identifier):
        self._command("enabled", selector, flag, identifier)

    def attribute(self, selector, attribute, identifier):
        self._command("attribute", selector, attribute, identifier)

    def number_of_elements(self, selector, identifier):
        self._command("number_of_elements", selector, identifier)

    def number_of_visible_elements(self, selector, identifier):
        self._command("number_of_visible_elements", selector, identifier)

    def cookie(self, name, identifier):
        self._command("cookie", name, identifier)

    def http_status(self, identifier):
        self._command("http_status", identifier)

    def alert_text(self, identifier):
        self._command("alert_text", identifier)

    def title(self, identifier):
        self._command("title", identifier)

    def url(self, identifier):
        self._command("url", identifier)

    def resource_exists(self, url, identifier):
        self._command("resource_exists", url, identifier)


def answer(stream: MessageStream, descriptor: CheckDescriptor, value: Any) -> None:
    """Emit the driver answer for one check."""
    stream.emit(DriverMessage(
        key=descriptor.semantic_key,
        identifier=descriptor.identifier,
        value=value,
    ))


@pytest.fixture
def stream():
    """Fresh message stream."""
    return MessageStream()


@pytest.fixture
def driver(stream):
    """Fake driver answering on the stream fixture."""
    return FakeDriver(stream)


@pytest.fixture
def reporter():
    """In-memory reporter."""
    return CollectingReporter()


@pytest.fixture
def scenario(driver, stream, reporter):
    """Root scenario wired to the fake driver."""
    return Scenario.create(driver, stream=stream, reporter=reporter)


@pytest.fixture
def respond(stream):
    """Answer a check on the stream fixture, by descriptor or handle."""
    def _respond(target: Any, value: Any) -> None:
        descriptor = getattr(target, "last_check", target)
        answer(stream, descriptor, value)
    return _respond
