"""Shared message stream between the driver and pending checks.

Every answer the driver produces is broadcast to every subscribed listener;
listeners do their own filtering by semantic key and identifier. Dispatch is
synchronous, in subscription order, over a snapshot of the subscriber list so
a listener may unsubscribe itself while it is being called.
"""

import logging
from typing import Any, Callable, List, Union

from pydantic import ValidationError

from ..models import DriverMessage

logger = logging.getLogger(__name__)

Listener = Callable[[DriverMessage], None]


class MessageStream:
    """Broadcast channel carrying driver answers."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self.message_counter: int = 0
        self.dropped_counter: int = 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Add a listener.

        Args:
            listener: Callable invoked with every DriverMessage

        Returns:
            Zero-argument callable that unsubscribes the listener
        """
        self._listeners.append(listener)
        logger.debug(f"Listener subscribed ({len(self._listeners)} active)")
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> bool:
        """Remove a listener.

        Returns:
            True if the listener was subscribed
        """
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        logger.debug(f"Listener unsubscribed ({len(self._listeners)} active)")
        return True

    def emit(self, payload: Union[DriverMessage, dict, Any]) -> None:
        """Broadcast one driver answer.

        Payloads that do not validate as a DriverMessage are dropped.

        Args:
            payload: DriverMessage or a mapping with key, identifier and value
        """
        if isinstance(payload, DriverMessage):
            message = payload
        else:
            try:
                message = DriverMessage.model_validate(payload)
            except ValidationError as e:
                self.dropped_counter += 1
                logger.debug(f"Dropping malformed driver message {payload!r}: {e.error_count()} error(s)")
                return

        self.message_counter += 1
        listeners = list(self._listeners)
        logger.debug(
            f"Dispatching {message.key}/{message.identifier} to {len(listeners)} listener(s)"
        )
        for listener in listeners:
            listener(message)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: Listener) -> bool:
        return listener in self._listeners
