"""JSON reporter for assertion results.

This module provides machine-readable JSON output for assertion results,
suitable for CI/CD integration and automated processing.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from ..models import Counters, ReportEvent
from .base import CollectingReporter


logger = logging.getLogger(__name__)


class JSONReporter(CollectingReporter):
    """Machine-readable JSON reporter.

    Collects report events and renders them as JSON or TAP (Test Anything
    Protocol) once the scenario is done.

    Attributes:
        output_file: Optional output file path
        format_type: Output format (json or tap)
    """

    def __init__(
        self,
        output_file: Path | None = None,
        format_type: str = "json",
    ):
        """Initialize JSON reporter.

        Args:
            output_file: Optional output file path
            format_type: Output format (json or tap)
        """
        super().__init__()
        if format_type not in ("json", "tap"):
            raise ValueError(f"Unknown report format: {format_type}")
        self.output_file = output_file
        self.format_type = format_type

    def report(self, counters: Counters) -> str:
        """Generate the report for the collected events.

        Args:
            counters: Session counters

        Returns:
            Report content as string
        """
        if self.format_type == "tap":
            content = self._generate_tap()
        else:
            content = self._generate_json(counters)

        # Write to file if specified
        if self.output_file:
            self._write_to_file(content)

        return content

    def _generate_json(self, counters: Counters) -> str:
        report = {
            "schema_version": "1.0.0",
            "timestamp": datetime.now().isoformat(),
            "summary": {
                "total": counters.expectations_total,
                "passed": counters.passed_total,
                "failed": counters.failures_total,
            },
            "assertions": [self._event_to_dict(event) for event in self.events],
        }

        return json.dumps(report, indent=2)

    def _generate_tap(self) -> str:
        lines = [
            "TAP version 13",
            f"1..{len(self.events)}",
        ]

        for i, event in enumerate(self.events, start=1):
            label = event.message or event.type
            if event.success:
                lines.append(f"ok {i} - {label}")
            else:
                lines.append(f"not ok {i} - {label}")
                lines.append(f"  # expected {event.expected!r}, got {event.value!r}")

        # Add summary
        lines.append("")
        lines.append(f"# tests {len(self.events)}")
        lines.append(f"# pass {len(self.passed)}")
        lines.append(f"# fail {len(self.failed)}")

        return "\n".join(lines)

    @staticmethod
    def _event_to_dict(event: ReportEvent) -> Dict[str, Any]:
        return {
            "type": event.type,
            "success": event.success,
            # Values come from the page; keep them JSON-safe
            "expected": event.expected if _is_json_scalar(event.expected) else str(event.expected),
            "value": event.value if _is_json_scalar(event.value) else str(event.value),
            "message": event.message,
            "identifier": event.identifier,
            "timestamp": event.timestamp.isoformat(),
        }

    def _write_to_file(self, content: str) -> None:
        """Write report content to file.

        Raises:
            IOError: If unable to write file
        """
        try:
            if self.output_file.parent:
                self.output_file.parent.mkdir(parents=True, exist_ok=True)

            with open(self.output_file, "w") as f:
                f.write(content)

            logger.info(f"Report written to {self.output_file}")

        except OSError as e:
            logger.error(f"Failed to write report to {self.output_file}: {e}")
            raise IOError(f"Failed to write report: {e}")


def _is_json_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (bool, int, float, str))
