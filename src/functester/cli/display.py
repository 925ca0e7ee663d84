"""Rich rendering of case plans and run summaries."""

from __future__ import annotations

import os

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from functester.domain.plan import CaseGroup
from functester.domain.results import CaseStatus, RunSummary

# Respect NO_COLOR environment variable for testing and accessibility
console = Console(no_color=os.environ.get("NO_COLOR") == "1")

_STATUS_STYLES = {
    CaseStatus.PASSED: "[green]PASS[/green]",
    CaseStatus.FAILED: "[red]FAIL[/red]",
    CaseStatus.ERROR: "[yellow]ERROR[/yellow]",
}


def format_duration(ms: float) -> str:
    """Format milliseconds as a short human-readable duration."""
    if ms < 1000:
        return f"{ms:.1f}ms"
    return f"{ms / 1000:.2f}s"


def show_plan(group: CaseGroup) -> None:
    """Print the synthesized cases of one group without running them."""
    table = Table(title=f"{group.name} ({len(group)} cases)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Description")
    table.add_column("Async", justify="center")

    for number, case in enumerate(group, start=1):
        table.add_row(
            str(number),
            case.kind.name.lower(),
            escape(case.description),
            "yes" if case.is_async else "",
        )

    console.print(table)


def show_summary(summary: RunSummary, show_passed: bool = True) -> None:
    """Print per-case outcomes and totals for one executed group."""
    table = Table(title=summary.group)
    table.add_column("Status", justify="center")
    table.add_column("Description")
    table.add_column("Message", style="dim")
    table.add_column("Time", justify="right")

    for result in summary.results:
        if result.passed and not show_passed:
            continue
        table.add_row(
            _STATUS_STYLES[result.status],
            escape(result.description),
            escape(result.message),
            format_duration(result.duration_ms),
        )

    console.print(table)

    colour = "green" if summary.all_passed else "red"
    console.print(
        f"[{colour}]{summary.passed} passed[/{colour}], "
        f"{summary.failed} failed, {summary.errors} errors "
        f"in {format_duration(summary.duration_ms)}"
    )
