"""
Error handling for driver assertions.

Nothing in here is raised back into test code while checks are running: driver
failures are raised inside queued actions, where the action queue logs their
structured form and moves on. Configuration errors are raised to the caller
before a session exists.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for driver assertions.

    - 1000-1099: Configuration errors
    - 1100-1199: Driver command errors
    """

    # Configuration errors (1000-1099)
    CONFIG_LOAD_FAILED = 1000
    INVALID_CONFIG = 1001

    # Driver command errors (1100-1199)
    DRIVER_METHOD_MISSING = 1100
    DRIVER_COMMAND_FAILED = 1101


class AssertionsError(Exception):
    """Base exception for driver assertion errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize assertions error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to a dictionary for structured logging.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class ConfigurationError(AssertionsError):
    """Configuration file could not be read or failed validation."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        code: ErrorCode = ErrorCode.INVALID_CONFIG,
        suggestion: Optional[str] = None
    ):
        context = {}
        if file_path:
            context["file_path"] = file_path

        super().__init__(
            code=code,
            message=message,
            suggestion=suggestion,
            context=context
        )


class DriverCommandError(AssertionsError):
    """Driver command could not be issued for a check."""

    def __init__(
        self,
        driver_method: str,
        identifier: str,
        reason: str,
        code: ErrorCode = ErrorCode.DRIVER_COMMAND_FAILED
    ):
        suggestion = None
        if code == ErrorCode.DRIVER_METHOD_MISSING:
            suggestion = f"Implement '{driver_method}' on the driver or avoid this check"

        super().__init__(
            code=code,
            message=f"Driver command '{driver_method}' failed: {reason}",
            suggestion=suggestion,
            context={"driver_method": driver_method, "identifier": identifier}
        )
        self.driver_method = driver_method
        self.identifier = identifier
