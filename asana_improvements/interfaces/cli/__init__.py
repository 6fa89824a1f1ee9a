"""CLI interface for Asana Improvements using Typer.

Usage:
    asana-improvements apply task.html -o out.html   # Enhance a saved page
    asana-improvements resolve Tomorrow "Dec 5"      # Check date parsing
    asana-improvements toggle                        # Flip the hidden preference
    asana-improvements config show                   # Print the configuration

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (page, dates, config)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from asana_improvements import __version__
from asana_improvements.interfaces.cli.commands import config, dates, page
from asana_improvements.interfaces.cli.common import config_option, state_option

app = typer.Typer(
    name="asana-improvements",
    help="Workflow enhancements for Asana task pages",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"asana-improvements version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Asana Improvements - due date hints, auto-expand and completed subtask toggling."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(page.app, name="page")
app.add_typer(dates.app, name="dates")
app.add_typer(config.app, name="config")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("apply")
def apply(
    page_path: Path = typer.Argument(..., help="Saved HTML page", exists=True, dir_okay=False),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the enhanced page here (default: stdout)"
    ),
    config_path: Optional[Path] = config_option,
    state: Optional[Path] = state_option,
) -> None:
    """Enhance a saved page (shortcut for 'page apply')."""
    page.apply(page=page_path, output=output, config=config_path, state=state)


@app.command("toggle")
def toggle(
    config_path: Optional[Path] = config_option,
    state: Optional[Path] = state_option,
) -> None:
    """Flip the hidden preference (shortcut for 'page toggle')."""
    page.toggle(config=config_path, state=state)


@app.command("resolve")
def resolve(
    labels: list[str] = typer.Argument(..., help="Due date labels"),
    config_path: Optional[Path] = config_option,
) -> None:
    """Resolve due date labels (shortcut for 'dates resolve')."""
    dates.resolve(labels=labels, config=config_path)


__all__ = ["app"]
