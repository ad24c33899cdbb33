"""Sequential action queue.

Check and attachment calls do not touch the driver directly; they enqueue an
action which ``run()`` executes later, strictly one after another in call
order. An action settles as soon as its command is issued and its listener is
subscribed, so issuance order is guaranteed while answers may be reported in
any order.
"""

import logging
from collections import deque
from typing import Awaitable, Callable, Deque

from ..errors import AssertionsError

logger = logging.getLogger(__name__)

Action = Callable[[], Awaitable[None]]


class ActionQueue:
    """FIFO queue of zero-argument async actions."""

    def __init__(self) -> None:
        self._actions: Deque[Action] = deque()
        self._running = False
        self.executed_counter: int = 0
        self.failed_counter: int = 0

    def enqueue(self, action: Action) -> None:
        """Append an action; it runs on the next (or current) ``run()``."""
        self._actions.append(action)

    async def run(self) -> int:
        """Execute queued actions in order until the queue is empty.

        Actions enqueued while running are executed by the same run. An action
        that raises is logged and skipped; nothing propagates to the caller.

        Returns:
            Number of actions executed by this call
        """
        if self._running:
            logger.debug("Action queue already running, new actions will be picked up")
            return 0

        self._running = True
        executed = 0
        try:
            while self._actions:
                action = self._actions.popleft()
                try:
                    await action()
                except AssertionsError as e:
                    self.failed_counter += 1
                    logger.error(f"Queued action failed: {e.to_dict()}")
                except Exception as e:
                    self.failed_counter += 1
                    logger.exception(f"Queued action raised unexpectedly: {e}")
                executed += 1
                self.executed_counter += 1
        finally:
            self._running = False

        logger.debug(f"Action queue drained ({executed} action(s) executed)")
        return executed

    @property
    def running(self) -> bool:
        return self._running

    def __len__(self) -> int:
        return len(self._actions)
