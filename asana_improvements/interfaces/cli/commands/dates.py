"""Due date CLI commands."""

from pathlib import Path
from typing import Optional

import typer

from asana_improvements.domain.dates import DateResolver, annotate
from asana_improvements.interfaces.cli.common import config_option, require_config

app = typer.Typer(help="Due date commands")


@app.command("resolve")
def resolve(
    labels: list[str] = typer.Argument(..., help="Due date labels, e.g. Tomorrow or 'Dec 5'"),
    config: Optional[Path] = config_option,
) -> None:
    """Show how due date labels resolve and how they would be annotated.

    Example:
        asana-improvements resolve Today Friday "Dec 5"
    """
    resolver = DateResolver(require_config(config).date_parser)

    for label in labels:
        due = resolver.resolve(label)
        if due is None:
            typer.echo(f"{label}: unrecognized")
            continue

        days = resolver.days_remaining(due)
        line = f"{label}: {due:%Y-%m-%d} ({days:+.2f} days)"
        if days is not None and days > 0:
            line += f" -> {annotate(label.strip(), days)}"
        typer.echo(line)
