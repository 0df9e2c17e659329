"""CLI application for whats-changed."""

import json
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from core.compare import compare_revisions
from core.config import get_settings
from core.exceptions import WhatsChangedError
from core.logging_setup import setup_logging
from core.models import Report

console = Console()
err_console = Console(stderr=True)


def format_text_output(report: Report) -> str:
    """Format the report as one block per manifest file."""
    lines = []
    for file_report in report.files:
        lines.append(file_report.file_path)
        for record in file_report.changes:
            lines.append(f"    {record.describe()}")
    return "\n".join(lines)


def format_json_output(report: Report) -> str:
    """Format JSON output."""
    files = []
    for file_report in report.files:
        files.append({
            "path": file_report.file_path,
            "changes": [
                {
                    "name": record.dependency_key,
                    "kind": record.kind.value,
                    "new_min_version": (
                        str(record.new_min_version) if record.new_min_version else None
                    ),
                }
                for record in file_report.changes
            ],
        })

    return json.dumps({"files": files, "notes": report.notes}, indent=2)


app = typer.Typer(
    name="whats-changed",
    help="whats-changed - Report dependencies upgraded or removed since a previous revision",
    add_completion=False,
)


@app.command()
def compare(
    previous_revision: str = typer.Argument(help="Previous git revision to compare the working tree against"),
    repo: Path = typer.Option(Path("."), "--repo", "-C", help="Repository working tree"),
    format_type: str = typer.Option("text", "--format", help="Output format: text or json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log skipped dependencies"),
) -> None:
    """Report dependencies in Cargo.toml and package.json manifests that were upgraded or removed."""
    try:
        settings = get_settings()
    except ValidationError as e:
        err_console.print(f"Error: Invalid configuration: {e}", style="red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(1)
    setup_logging(logging.INFO if verbose else settings.log_level)

    if format_type not in ("text", "json"):
        err_console.print(f"Error: Unknown format: {format_type}", style="red")
        raise typer.Exit(1)

    try:
        report = compare_revisions(previous_revision, repo, settings.manifest_names)
    except WhatsChangedError as e:
        err_console.print(f"Error: {e}", style="red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    if format_type == "json":
        console.print(format_json_output(report), markup=False, highlight=False, soft_wrap=True)
        return

    for note in report.notes:
        err_console.print(note, markup=False, highlight=False, soft_wrap=True)
    if report.has_changes:
        console.print(format_text_output(report), markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
