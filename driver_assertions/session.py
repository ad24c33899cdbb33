"""Assertion session.

The session is the one coordinator that owns every piece of mutable state of
a scenario: the chain/query stack, the action queue, the correlation registry,
the proceeded set, the report sequencer and the counters. Handles
(``Scenario``, ``Assertions``) hold a reference to it and ask it to perform
transitions; they never mutate its state themselves.
"""

import inspect
import logging
from typing import TYPE_CHECKING, Any, Optional, Tuple

from .checks import EXPECTED, MESSAGE, SELECTOR, CheckKind
from .config import AssertionsConfig
from .driver import Driver
from .errors import DriverCommandError, ErrorCode
from .models import CheckDescriptor, Counters, ReportEvent
from .reporters import CollectingReporter, Reporter
from .services import (
    ActionQueue,
    AttachmentListener,
    AttachmentOperator,
    ChainFrame,
    ChainStack,
    CorrelationRegistry,
    MessageStream,
    ProceededSet,
    ReportSequencer,
)

if TYPE_CHECKING:
    from .scenario import Scenario

logger = logging.getLogger(__name__)


class Session:
    """State and wiring behind one scenario's assertions."""

    def __init__(
        self,
        driver: Any,
        stream: Optional[MessageStream] = None,
        reporter: Optional[Reporter] = None,
        config: Optional[AssertionsConfig] = None,
    ):
        """Initialize session.

        Args:
            driver: Browser-automation driver (see driver.Driver)
            stream: Shared message stream the driver answers on
            reporter: Sink for report events (default: CollectingReporter)
            config: Session configuration (default: AssertionsConfig())
        """
        self.config = config or AssertionsConfig()
        self.config.apply_logging()

        self.driver = driver
        self.stream = stream or MessageStream()
        self.reporter = reporter or CollectingReporter()
        self.counters = Counters()
        self.queue = ActionQueue()
        self.proceeded = ProceededSet()
        self.sequencer = ReportSequencer(self.reporter.emit, self.config.resolution_order)
        self.registry = CorrelationRegistry(
            self.stream,
            self._on_check_resolved,
            suppress_absent_expected=self.config.suppress_absent_expected,
            value_presence_keys=self.config.value_presence_keys,
        )
        self.chain_stack = ChainStack()
        self._root: Optional["Scenario"] = None

        if not isinstance(driver, Driver):
            logger.info(f"{type(driver).__name__} implements part of the driver interface only")

        logger.info(
            f"Session created (resolution_order={self.config.resolution_order.value}, "
            f"suppress_absent_expected={self.config.suppress_absent_expected})"
        )

    @property
    def root(self) -> "Scenario":
        """The outer scenario handle; created on first use if none was attached."""
        if self._root is None:
            from .scenario import Scenario
            self._root = Scenario(self)
        return self._root

    @property
    def has_root(self) -> bool:
        return self._root is not None

    def attach_root(self, scenario: "Scenario") -> None:
        self._root = scenario

    # Chain/query transitions

    def open_chain(self) -> None:
        self.chain_stack = self.chain_stack.push_chain()
        logger.debug(f"Chain opened (depth={len(self.chain_stack)})")

    def open_query(self, selector: str) -> None:
        self.chain_stack = self.chain_stack.push_query(selector)
        logger.debug(f"Query opened for {selector!r} (depth={len(self.chain_stack)})")

    def close_frame(self) -> Optional[ChainFrame]:
        """Pop the innermost chain or query; a no-op when none is open."""
        self.chain_stack, frame = self.chain_stack.pop()
        if frame is None:
            logger.debug("end() with no open chain or query")
        else:
            logger.debug(f"Closed {frame.kind.value} frame (depth={len(self.chain_stack)})")
        return frame

    # Checks and attachments

    def issue(self, kind: CheckKind, values: Tuple[Any, ...]) -> CheckDescriptor:
        """Register a check and queue its driver command.

        Args:
            kind: Check kind from the catalog
            values: Positional arguments as passed by the caller

        Returns:
            Descriptor of the new check
        """
        bound = kind.bind(values, self.chain_stack.active_selector)
        slot = self.sequencer.reserve()
        descriptor, listener = self.registry.register(
            kind.semantic_key,
            kind.report_type,
            kind.comparator,
            bound[EXPECTED],
            bound.get(MESSAGE),
            check=kind.name,
            sequence=slot,
            selector=bound.get(SELECTOR),
            arguments=kind.extra_arguments(bound),
        )
        driver_args = kind.driver_args(bound)

        async def issue_command() -> None:
            # Subscribe first so a driver answering synchronously is still heard
            self.registry.subscribe(listener)
            await self._call_driver(kind.driver_method, driver_args, descriptor)

        self.queue.enqueue(issue_command)
        return descriptor

    async def _call_driver(
        self,
        method_name: str,
        args: Tuple[Any, ...],
        descriptor: CheckDescriptor,
    ) -> None:
        method = getattr(self.driver, method_name, None)
        if method is None:
            self._abandon(descriptor)
            raise DriverCommandError(
                method_name,
                descriptor.identifier,
                "driver has no such method",
                code=ErrorCode.DRIVER_METHOD_MISSING,
            )

        logger.debug(f"Issuing {method_name}{args + (descriptor.identifier,)!r}")
        try:
            result = method(*args, descriptor.identifier)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._abandon(descriptor)
            raise DriverCommandError(method_name, descriptor.identifier, str(e)) from e

    def _abandon(self, descriptor: CheckDescriptor) -> None:
        if self.registry.abandon(descriptor):
            self.sequencer.fulfil(descriptor.sequence, None)

    def attach(
        self,
        descriptor: Optional[CheckDescriptor],
        operator: AttachmentOperator,
        expected: Any,
        message: Optional[str],
    ) -> None:
        """Queue a comparator attachment on an issued check.

        Args:
            descriptor: Check whose answer is judged
            operator: Attachment operator
            expected: Value for the operator ([low, high] for BETWEEN)
            message: Message for the reporter
        """
        if descriptor is None:
            logger.warning(f"'{operator.value}' has no preceding check to attach to, ignoring")
            return

        listener = AttachmentListener(
            descriptor,
            operator,
            expected,
            message,
            self.sequencer.reserve(),
            self.stream,
            self.proceeded,
            self._settle,
        )

        async def subscribe_attachment() -> None:
            if self.registry.is_abandoned(descriptor.identifier):
                # The check's driver command failed; there is nothing to judge
                logger.debug(
                    f"Dropping '{operator.value}' on abandoned check {descriptor.identifier}"
                )
                self._settle(listener.sequence, None)
                return
            self.stream.subscribe(listener)
            answer = self.registry.answer(descriptor.identifier)
            if answer is not None:
                # The check was answered before this attachment was queued
                listener(answer)

        self.queue.enqueue(subscribe_attachment)

    # Resolution

    def _on_check_resolved(self, descriptor: CheckDescriptor, report: Optional[ReportEvent]) -> None:
        self._settle(descriptor.sequence, report)

    def _settle(self, slot: int, report: Optional[ReportEvent]) -> None:
        if report is not None:
            self.counters.record(report.success)
        self.sequencer.fulfil(slot, report)

    # Lifecycle

    async def run(self) -> int:
        """Issue every queued command, in call order."""
        return await self.queue.run()

    def finish(self) -> Counters:
        """Release held reports and log checks that were never answered.

        Returns:
            The session counters
        """
        self.sequencer.flush()
        for pending in self.registry.get_pending_checks():
            logger.warning(
                f"Check {pending['check']} ({pending['identifier']}) was never answered"
            )
        if len(self.queue):
            logger.warning(f"{len(self.queue)} queued action(s) were never run")

        logger.info(str(self.counters))
        return self.counters
