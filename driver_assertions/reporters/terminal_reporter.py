"""Terminal reporter for assertion results.

This module provides human-readable terminal output for assertion results
using the rich library for formatted display.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models import Counters, RegistryStats, ReportEvent
from .base import CollectingReporter


logger = logging.getLogger(__name__)


class TerminalReporter(CollectingReporter):
    """Human-readable terminal reporter using rich library.

    Prints one line per assertion as it is reported and a summary table
    at the end of the scenario.

    Attributes:
        console: Rich console for output
        verbose: Whether to show expected/actual values for passing assertions
        no_ui: Disable rich formatting (plain text)
    """

    def __init__(
        self,
        verbose: bool = False,
        no_ui: bool = False,
        console: Optional[Console] = None,
    ):
        """Initialize terminal reporter.

        Args:
            verbose: Show expected/actual values for passing assertions too
            no_ui: Disable rich formatting (plain text)
            console: Console to print to (default: a new stdout console)
        """
        super().__init__()
        self.console = console or Console(force_terminal=not no_ui, no_color=no_ui)
        self.verbose = verbose
        self.no_ui = no_ui

    def emit(self, event: ReportEvent) -> None:
        """Print one assertion result.

        Args:
            event: Report event to display
        """
        super().emit(event)

        label = event.message or event.type
        if self.no_ui:
            symbol = "[PASS]" if event.success else "[FAIL]"
            self.console.print(f"{symbol} {label}", markup=False)
        else:
            symbol = "[green]✓[/green]" if event.success else "[red]✗[/red]"
            self.console.print(f"{symbol} {escape(label)} [dim]({event.type})[/dim]")

        if not event.success or self.verbose:
            # Page values may contain brackets
            detail = f"expected {event.expected!r}, got {event.value!r}"
            if self.no_ui:
                self.console.print(f"    - {detail}", markup=False)
            else:
                self.console.print(f"    [dim]• {escape(detail)}[/dim]")

    def print_summary(self, counters: Counters, stats: Optional[RegistryStats] = None) -> None:
        """Print assertion summary.

        Args:
            counters: Session counters
            stats: Optional registry statistics (adds an unanswered row)
        """
        self.console.print("")
        unanswered = stats.pending if stats else 0

        if self.no_ui:
            # Plain text summary
            self.console.print("=" * 60)
            self.console.print("Assertion Summary")
            self.console.print("-" * 60)
            self.console.print(f"Total:      {counters.expectations_total}")
            self.console.print(f"Passed:     {counters.passed_total}")
            self.console.print(f"Failed:     {counters.failures_total}")
            if stats:
                self.console.print(f"Unanswered: {unanswered}")
            self.console.print("=" * 60)
        else:
            table = Table(title="Assertion Summary", show_header=True, header_style="bold cyan")
            table.add_column("Metric", style="dim")
            table.add_column("Value", justify="right")

            table.add_row("Total Assertions", str(counters.expectations_total))
            table.add_row("Passed", f"[green]{counters.passed_total}[/green]")

            if counters.failures_total > 0:
                table.add_row("Failed", f"[red]{counters.failures_total}[/red]")
            else:
                table.add_row("Failed", "0")

            if unanswered > 0:
                table.add_row("Unanswered", f"[yellow]{unanswered}[/yellow]")

            self.console.print(table)

        if counters.failures_total == 0:
            if self.no_ui:
                self.console.print("\nAll assertions PASSED")
            else:
                self.console.print("\n[bold green]✓ All assertions PASSED[/bold green]")
        else:
            if self.no_ui:
                self.console.print("\nSome assertions FAILED")
            else:
                self.console.print("\n[bold red]✗ Some assertions FAILED[/bold red]")
