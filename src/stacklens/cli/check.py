"""CLI command: stacklens check -- report ineffective z-index declarations."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from stacklens.analysis import analyze
from stacklens.parser import ParseError


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def check(files: tuple[str, ...], output_format: str) -> None:
    """Analyze CSS/SCSS files and print their diagnostics.

    Exits with code 1 if any file has a diagnostic or fails to parse.
    """
    report: dict[str, object] = {}
    total = 0
    failed = False

    for file in files:
        path = Path(file)
        try:
            result = analyze(path.read_text(encoding="utf-8"), path.resolve().as_uri())
        except ParseError as exc:
            failed = True
            click.echo(f"{file}: parse error: {exc}", err=True)
            report[file] = {"error": str(exc)}
            continue

        total += len(result.diagnostics)
        if output_format == "json":
            report[file] = [d.to_dict() for d in result.diagnostics]
        else:
            for diag in result.diagnostics:
                click.echo(f"{file}:{diag}")

    if output_format == "json":
        click.echo(json.dumps(report, indent=2))
    else:
        click.echo(f"\nSummary: {total} ineffective z-index declaration(s) in {len(files)} file(s)")

    if failed or total:
        sys.exit(1)
    sys.exit(0)
