"""Command-line interface for functester.

Provides commands for:
- Listing the cases a harness synthesizes (plan)
- Running harnesses outside pytest (run)
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from functester import __version__
from functester.cli.display import console, show_plan, show_summary
from functester.cli.loading import load_harnesses
from functester.config import load_config
from functester.exceptions import FuncTesterError
from functester.logging import VerbosityType, setup_logging
from functester.runner import CaseRunner

app = typer.Typer(
    name="functester",
    help="Declarative parameter-validation test generator",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"functester v{__version__}")
        raise typer.Exit()


@app.callback()  # type: ignore[misc]
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show every case and plan details")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Minimal output (warnings only)")
    ] = False,
    json_output: Annotated[
        bool, typer.Option("--json", help="Emit logs as JSON (machine-readable)")
    ] = False,
) -> None:
    """Declarative parameter-validation test generator."""
    verbosity: VerbosityType | None = None
    if quiet:
        verbosity = "quiet"
    elif verbose:
        verbosity = "verbose"
    ctx.obj = {"verbosity": verbosity, "json_output": json_output}

    # run reconfigures once its config file is loaded
    setup_logging(verbosity=verbosity, json_output=json_output)


@app.command("plan")  # type: ignore[misc]
def plan_cmd(
    target: Annotated[str, typer.Argument(help="MODULE:ATTR of a harness or harness factory")],
) -> None:
    """List the cases synthesized for each harness without running them."""
    try:
        harnesses = load_harnesses(target)
        groups = [harness.run() for harness in harnesses]
    except FuncTesterError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2) from None

    for group in groups:
        show_plan(group)


@app.command("run")  # type: ignore[misc]
def run_cmd(
    ctx: typer.Context,
    target: Annotated[str, typer.Argument(help="MODULE:ATTR of a harness or harness factory")],
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Runner config YAML")
    ] = None,
    stop_on_failure: Annotated[
        bool | None,
        typer.Option(
            "--stop-on-failure/--no-stop-on-failure", help="Stop a group at first failure"
        ),
    ] = None,
    failures_only: Annotated[
        bool, typer.Option("--failures-only", help="Only list failing cases")
    ] = False,
) -> None:
    """Run every case of each harness and report the results.

    Exits with status 1 if any case fails.
    """
    try:
        config = load_config(config_path)
    except FuncTesterError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2) from None

    # CLI flags sit above config file and env vars
    updates: dict[str, object] = {}
    if stop_on_failure is not None:
        updates["stop_on_failure"] = stop_on_failure
    if failures_only:
        updates["show_passed"] = False
    if cli_verbosity := (ctx.obj or {}).get("verbosity"):
        updates["verbosity"] = cli_verbosity
    config = config.model_copy(update=updates) if updates else config

    verbosity: VerbosityType = config.verbosity
    setup_logging(
        verbosity=verbosity,
        json_output=(ctx.obj or {}).get("json_output", False),
        log_file=config.log_file,
    )

    try:
        harnesses = load_harnesses(target)
    except FuncTesterError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2) from None

    try:
        summaries = CaseRunner(config).run_all(harnesses)
    except FuncTesterError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2) from None

    for summary in summaries:
        show_summary(summary, show_passed=config.show_passed)

    if not all(summary.all_passed for summary in summaries):
        raise typer.Exit(1)


__all__ = ["app"]
