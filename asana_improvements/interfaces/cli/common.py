"""Shared utilities for CLI commands.

- Reusable --config / --state options
- Configuration loading with user-facing errors
- Formatted output helpers (error, success, info)
"""

from pathlib import Path

import typer

from asana_improvements.domain.shared import Err
from asana_improvements.global_config import load_config
from asana_improvements.models import EnhancerConfig

# Usage: def my_command(config: Optional[Path] = config_option) -> None:
config_option = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to config.json (default: ~/.asana_improvements/config.json)",
    dir_okay=False,
)

state_option = typer.Option(
    None,
    "--state",
    "-s",
    help="Path to the preference store (default: ~/.asana_improvements/state.json)",
    dir_okay=False,
)


def require_config(path: Path | None) -> EnhancerConfig:
    """Load the configuration or exit with an error.

    Raises:
        typer.Exit: If the configuration file exists but cannot be used.
    """
    result = load_config(path)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    return result.value


def print_error(msg: str) -> None:
    """Print a formatted error message to stderr."""
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str, err: bool = False) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN), err=err)


def print_info(msg: str, err: bool = False) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.CYAN), err=err)


def print_separator(char: str = "=", width: int = 60, err: bool = False) -> None:
    typer.echo(char * width, err=err)
