"""CLI command: stacklens fix -- apply quick fixes to ineffective z-index declarations."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stacklens.analysis import analyze_stylesheet
from stacklens.fixes import generate_fixes
from stacklens.model.fix import InsertIsolationIsolate, RemoveDeclaration
from stacklens.model.text import Range, TextEdit, apply_edits
from stacklens.parser import ParseError, parse_stylesheet

_STRATEGIES = {
    "isolate": InsertIsolationIsolate,
    "remove": RemoveDeclaration,
}


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--strategy",
    type=click.Choice(sorted(_STRATEGIES)),
    default="isolate",
    show_default=True,
    help="isolate: add isolation: isolate; remove: delete the z-index",
)
@click.option("--write", is_flag=True, help="Rewrite the file instead of printing it")
def fix(file: str, strategy: str, write: bool) -> None:
    """Fix every ineffective z-index declaration in FILE.

    With ``isolate``, each rule gets one ``isolation: isolate`` however many
    z-index declarations it holds.
    """
    path = Path(file)
    source = path.read_text(encoding="utf-8")
    try:
        stylesheet = parse_stylesheet(source)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    result = analyze_stylesheet(stylesheet, path.resolve().as_uri())

    # Every parsed declaration has a source span.
    owners = {Range.from_node(d): d.parent for d in stylesheet.declarations()}
    isolated: set[object] = set()

    wanted = _STRATEGIES[strategy]
    edits: list[TextEdit] = []
    for diagnostic in result.diagnostics:
        if wanted is InsertIsolationIsolate:
            owner = owners.get(diagnostic.range)
            if owner in isolated:
                continue
            isolated.add(owner)
        for quick_fix in generate_fixes(diagnostic, source):
            if isinstance(quick_fix, wanted):
                edits.append(quick_fix.edit)

    fixed = apply_edits(source, edits)
    if write:
        if edits:
            path.write_text(fixed, encoding="utf-8")
        click.echo(f"Fixed {len(result.diagnostics)} declaration(s) in {file}", err=True)
    else:
        click.echo(fixed, nl=False)
