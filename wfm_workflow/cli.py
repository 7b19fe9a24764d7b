"""Command line interface for the workflow client."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import BaseModel, ValidationError

from wfm_workflow.config import load_config
from wfm_workflow.contracts import Result, Workflow, Workorder
from wfm_workflow.status import check_status, step_review

app = typer.Typer(help="CLI for wfm workflows")


class StatusDocument(BaseModel):
    """Workorder, workflow and result read from a single file."""

    workorder: Workorder
    workflow: Workflow
    result: Optional[Result] = None


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", help="Logging level for the run"),
) -> None:
    """wfm-workflow CLI entry point."""
    logging.basicConfig(level=log_level.upper())


@app.command("status")
def status(path: Path) -> None:
    """
    Show the display status of a workorder.

    Reads a YAML or JSON document with ``workorder``, ``workflow`` and an
    optional ``result`` and prints the derived status and next step.

    Example:
        wfm-workflow status ./workorder.yaml
        # Output: In Progress
        #         Next step: 1 (inspect)
    """
    if not path.exists():
        typer.echo("File not found")
        raise typer.Exit(code=1)

    try:
        data = yaml.safe_load(path.read_text()) or {}
        document = StatusDocument.model_validate(data)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as exc:
        typer.secho(f"Invalid document: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    steps = document.workflow.steps
    typer.echo(check_status(document.workorder, document.workflow, document.result).value)

    review = step_review(steps, document.result)
    if review.complete:
        typer.echo(f"All {len(steps)} steps complete")
    elif review.next_step_index < len(steps):
        typer.echo(
            f"Next step: {review.next_step_index} ({steps[review.next_step_index].code})"
        )


@app.command("config")
def show_config(path: Optional[Path] = None) -> None:
    """Print the loaded client configuration as YAML."""
    config = load_config(str(path) if path else None)
    typer.echo(yaml.safe_dump(config.model_dump(), sort_keys=False).rstrip())


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
