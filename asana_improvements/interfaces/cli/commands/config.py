"""Configuration CLI commands."""

import json
from pathlib import Path
from typing import Optional

import typer

from asana_improvements.domain.shared import Err
from asana_improvements.global_config import get_config_path, save_config
from asana_improvements.interfaces.cli.common import (
    config_option,
    print_error,
    print_success,
    require_config,
)
from asana_improvements.models import EnhancerConfig

app = typer.Typer(help="Configuration commands")


@app.command("show")
def show(config: Optional[Path] = config_option) -> None:
    """Print the effective configuration as JSON."""
    enhancer_config = require_config(config)
    typer.echo(json.dumps(enhancer_config.model_dump(), indent=2))


@app.command("init")
def init(
    config: Optional[Path] = config_option,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a config.json holding the default configuration."""
    path = config or get_config_path()
    if path.exists() and not force:
        print_error(f"{path} already exists (use --force to overwrite)")
        raise typer.Exit(1)

    result = save_config(EnhancerConfig(), path)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    print_success(f"Wrote default configuration to {path}")
