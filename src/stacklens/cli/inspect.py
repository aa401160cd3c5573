"""CLI command: stacklens inspect -- list what establishes stacking contexts."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stacklens.analysis import analyze
from stacklens.parser import ParseError


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def inspect(file: str) -> None:
    """Show every declaration that establishes a stacking context.

    Positions are printed 1-based as line:column.
    """
    path = Path(file)
    try:
        result = analyze(path.read_text(encoding="utf-8"), path.resolve().as_uri())
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"File: {file}")
    click.echo(f"Stacking contexts: {len(result.contexts)}")
    click.echo(f"Rules: {len(result.rule_ranges)}")
    click.echo(f"Ineffective z-index: {len(result.diagnostics)}")
    click.echo()

    click.echo("Declarations:")
    for context in result.contexts:
        click.echo(f"  {context.range}  {context.property}: {context.value}")
    click.echo()

    click.echo("Rules:")
    for rule_range in result.rule_ranges:
        click.echo(f"  {rule_range}")
