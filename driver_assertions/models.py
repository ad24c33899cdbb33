"""Data models for driver assertions.

Wire shapes (driver answers, report events) and the check descriptor are
pydantic models; internal bookkeeping uses plain dataclasses.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional

from pydantic import AliasChoices, BaseModel, Field


class FrameKind(str, Enum):
    """Kind of frame on the chain/query stack."""
    CHAINING = "chaining"
    QUERYING = "querying"


class ChainState(str, Enum):
    """Mode of the chain/query state machine (the top frame)."""
    IDLE = "idle"
    CHAINING = "chaining"
    QUERYING = "querying"


class DriverMessage(BaseModel):
    """Answer emitted by the driver on the shared message stream."""

    model_config = {"frozen": True, "populate_by_name": True}

    key: str = Field(..., description="Semantic key of the driver query")
    identifier: str = Field(
        ...,
        validation_alias=AliasChoices("identifier", "hash"),
        description="Correlation identifier minted for the check",
    )
    value: Any = Field(None, description="Value observed by the driver")


class ReportEvent(BaseModel):
    """Outcome of one resolved comparison, handed to the reporter."""

    success: bool
    expected: Any = None
    value: Any = None
    message: Optional[str] = None
    type: str = Field(..., description="Report type, '!'-prefixed for negated checks")
    identifier: Optional[str] = Field(None, description="Identifier of the answering check")
    timestamp: datetime = Field(default_factory=datetime.now)

    def payload(self) -> Dict[str, Any]:
        """The five fields every reporter understands."""
        return {
            "success": self.success,
            "expected": self.expected,
            "value": self.value,
            "message": self.message,
            "type": self.type,
        }

    def __str__(self) -> str:
        status_symbol = "✓" if self.success else "✗"
        msg = f"{status_symbol} {self.type}"
        if self.message:
            msg += f": {self.message}"
        return msg


class CheckDescriptor(BaseModel):
    """
    One assertion request, tied to one driver command.

    Created when a check method is called and bound into the handle that call
    returns, so that a following attachment (``is_``, ``gt`` ...) targets
    exactly this check.
    """

    model_config = {"frozen": True}

    identifier: str = Field(..., description="Correlation identifier (uuid4)")
    check: str = Field(..., description="Public check name, e.g. 'number_of_elements'")
    semantic_key: str = Field(..., description="Key the driver answers with")
    report_type: str = Field(..., description="Type reported for this check")
    comparator: Callable[[Any, Any], bool] = Field(..., exclude=True)
    expected: Any = None
    selector: Optional[str] = None
    message: Optional[str] = None
    arguments: Dict[str, Any] = Field(
        default_factory=dict,
        description="Extra named driver arguments (property, attribute, name, url)",
    )
    sequence: int = Field(..., ge=0, description="Report slot reserved at call time")


class RegistryStats(BaseModel):
    """
    Statistics about the correlation registry for diagnostics.

    A growing ``pending`` count at the end of a run means the driver never
    answered some checks; those checks were neither passed nor failed.
    """

    total_registered: int = Field(default=0, ge=0, description="Checks registered")
    total_answered: int = Field(default=0, ge=0, description="Checks whose answer arrived")
    total_suppressed: int = Field(
        default=0,
        ge=0,
        description="Answered checks whose comparison was skipped (no expected value)",
    )
    total_abandoned: int = Field(
        default=0,
        ge=0,
        description="Checks dropped because the driver command failed",
    )
    pending: int = Field(default=0, ge=0, description="Checks still awaiting an answer")
    subscribed_listeners: int = Field(default=0, ge=0, description="Listeners on the stream")


@dataclass
class Counters:
    """Expectation and failure totals for one scenario."""
    expectations_total: int = 0
    failures_total: int = 0

    def record(self, success: bool) -> None:
        self.expectations_total += 1
        if not success:
            self.failures_total += 1

    @property
    def passed_total(self) -> int:
        return self.expectations_total - self.failures_total

    def __str__(self) -> str:
        return (
            f"Assertions: {self.passed_total} passed, {self.failures_total} failed "
            f"({self.expectations_total} total)"
        )
