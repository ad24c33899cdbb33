"""Interface of the browser-automation driver.

The driver runs out of process. Each method issues one query and returns
without waiting for the result; the driver later emits
``{"key": ..., "identifier": ..., "value": ...}`` on the session's
MessageStream, echoing the identifier it was given as last argument.

A method may return an awaitable if sending the command is itself
asynchronous. Drivers may implement a subset of the methods; checks whose
method is missing are logged and dropped.
"""

from typing import Any, Awaitable, Optional, Protocol, Union, runtime_checkable

CommandResult = Optional[Union[Awaitable[Any], Any]]


@runtime_checkable
class Driver(Protocol):
    """Commands the assertion checks issue."""

    def exists(self, selector: str, identifier: str) -> CommandResult: ...

    def visible(self, selector: str, identifier: str) -> CommandResult: ...

    def text(self, selector: str, identifier: str) -> CommandResult: ...

    def val(self, selector: str, identifier: str) -> CommandResult: ...

    def css(self, selector: str, property: str, identifier: str) -> CommandResult: ...

    def width(self, selector: str, identifier: str) -> CommandResult: ...

    def height(self, selector: str, identifier: str) -> CommandResult: ...

    def selected(self, selector: str, flag: bool, identifier: str) -> CommandResult: ...

    def enabled(self, selector: str, flag: bool, identifier: str) -> CommandResult: ...

    def attribute(self, selector: str, attribute: str, identifier: str) -> CommandResult: ...

    def number_of_elements(self, selector: str, identifier: str) -> CommandResult: ...

    def number_of_visible_elements(self, selector: str, identifier: str) -> CommandResult: ...

    def cookie(self, name: str, identifier: str) -> CommandResult: ...

    def http_status(self, identifier: str) -> CommandResult: ...

    def alert_text(self, identifier: str) -> CommandResult: ...

    def title(self, identifier: str) -> CommandResult: ...

    def url(self, identifier: str) -> CommandResult: ...

    def resource_exists(self, url: str, identifier: str) -> CommandResult: ...
