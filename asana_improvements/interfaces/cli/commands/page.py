"""Page CLI commands.

Commands that operate on saved task pages and on the persisted
"completed subtasks hidden" preference.
"""

from pathlib import Path
from typing import Optional

import typer
from lxml import etree

from asana_improvements.application import Enhancer, PassReport
from asana_improvements.global_config import get_state_store
from asana_improvements.infrastructure.page import LxmlDocument
from asana_improvements.infrastructure.storage import PersistedFlag
from asana_improvements.interfaces.cli.common import (
    config_option,
    print_error,
    print_info,
    print_separator,
    print_success,
    require_config,
    state_option,
)

app = typer.Typer(help="Page enhancement commands")


def format_report(report: PassReport) -> list[str]:
    """Summary lines for a reconciliation pass."""
    return [
        f"Due dates annotated:   {report.annotated}",
        f"Affordances expanded:  {report.expanded}",
        f"Toggle controls added: {report.controls_created}",
        f"Completed rows styled: {report.rows_styled}",
    ]


@app.command("apply")
def apply(
    page: Path = typer.Argument(..., help="Saved HTML page", exists=True, dir_okay=False),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the enhanced page here (default: stdout)"
    ),
    config: Optional[Path] = config_option,
    state: Optional[Path] = state_option,
) -> None:
    """Apply the enhancements to a saved task page.

    Injects the stylesheet and runs one reconciliation pass. The summary
    goes to stderr so stdout can be redirected to a file.

    Example:
        asana-improvements apply task.html -o task.enhanced.html
    """
    enhancer_config = require_config(config)

    try:
        document = LxmlDocument.from_path(page)
    except (OSError, UnicodeDecodeError, etree.ParserError) as e:
        print_error(f"Cannot read {page}: {e}")
        raise typer.Exit(1)

    enhancer = Enhancer(document, get_state_store(state), enhancer_config)
    report = enhancer.apply_once()
    if report is None:
        print_error("Enhancement pass failed; see log output")
        raise typer.Exit(1)

    html = document.serialize()
    if output is not None:
        try:
            output.write_text(html, encoding="utf-8")
        except OSError as e:
            print_error(f"Cannot write {output}: {e}")
            raise typer.Exit(1)
    else:
        typer.echo(html)

    print_separator(err=True)
    for line in format_report(report):
        print_info(line, err=True)
    print_separator(err=True)
    if output is not None:
        print_success(f"Wrote {output}", err=True)


@app.command("toggle")
def toggle(
    config: Optional[Path] = config_option,
    state: Optional[Path] = state_option,
) -> None:
    """Flip the persisted "hide completed subtasks" preference.

    Example:
        asana-improvements toggle
    """
    enhancer_config = require_config(config)
    flag = PersistedFlag(get_state_store(state), enhancer_config.storage.completed_tasks_hidden)

    hidden = not flag.get()
    if not flag.set(hidden):
        print_error("Failed to save the preference; see log output")
        raise typer.Exit(1)

    if hidden:
        print_success("Completed subtasks are now hidden")
    else:
        print_success("Completed subtasks are now shown")
