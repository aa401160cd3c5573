"""CLI command: stacklens watch -- re-analyze files as they change."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from stacklens.config import StacklensConfig
from stacklens.errors import ConfigError
from stacklens.events.types import (
    AnalysisFailed,
    AnalysisUpdated,
    DocumentChanged,
    DocumentClosed,
    DocumentOpened,
    VisibleEditorsChanged,
)
from stacklens.session import Session


class _Reporter:
    """Prints analysis events using the paths the user passed in."""

    def __init__(self, paths: dict[str, Path]) -> None:
        self.paths = paths

    def updated(self, event: AnalysisUpdated) -> None:
        name = self.paths.get(event.uri, event.uri)
        diagnostics = event.result.diagnostics
        click.echo(
            f"{name} (v{event.result.version}): {len(event.result.contexts)} stacking "
            f"context declaration(s), {len(diagnostics)} ineffective z-index"
        )
        for diag in diagnostics:
            click.echo(f"  {name}:{diag}")

    def failed(self, event: AnalysisFailed) -> None:
        name = self.paths.get(event.uri, event.uri)
        click.echo(f"{name} (v{event.version}): {event.error} (keeping last result)", err=True)


async def _watch(paths: list[Path], config: StacklensConfig, interval: float, once: bool) -> None:
    session = Session(config, loop=asyncio.get_running_loop())
    by_uri = {path.resolve().as_uri(): path for path in paths}
    reporter = _Reporter(by_uri)
    session.bus.subscribe(AnalysisUpdated, reporter.updated)
    session.bus.subscribe(AnalysisFailed, reporter.failed)

    mtimes: dict[str, float] = {}
    versions: dict[str, int] = {}
    for uri, path in by_uri.items():
        mtimes[uri] = path.stat().st_mtime
        versions[uri] = 0
        session.push(DocumentOpened(uri, path.read_text(encoding="utf-8"), 0))
    session.push(VisibleEditorsChanged(tuple(by_uri)))

    if once:
        session.flush()
        return

    try:
        while True:
            await asyncio.sleep(interval)
            for uri, path in by_uri.items():
                if uri not in mtimes:
                    continue
                try:
                    mtime = path.stat().st_mtime
                except FileNotFoundError:
                    click.echo(f"{path}: removed", err=True)
                    del mtimes[uri]
                    session.push(DocumentClosed(uri))
                    continue
                if mtime == mtimes[uri]:
                    continue
                mtimes[uri] = mtime
                versions[uri] += 1
                text = path.read_text(encoding="utf-8")
                session.push(DocumentChanged(uri, text, versions[uri]))
    finally:
        session.close()


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--interval", default=0.25, show_default=True, help="Polling interval in seconds")
@click.option("--debounce-ms", default=400, show_default=True, help="Quiet window before re-analysis")
@click.option("--max-wait-ms", default=1000, show_default=True, help="Longest delay under continuous edits")
@click.option("--once", is_flag=True, help="Analyze once and exit")
def watch(
    files: tuple[str, ...],
    interval: float,
    debounce_ms: int,
    max_wait_ms: int,
    once: bool,
) -> None:
    """Watch FILES and print diagnostics whenever they change.

    Press Ctrl+C to stop.
    """
    try:
        config = StacklensConfig(debounce_ms=debounce_ms, max_wait_ms=max_wait_ms)
    except ConfigError as exc:
        raise click.BadParameter(str(exc)) from exc

    try:
        asyncio.run(_watch([Path(f) for f in files], config, interval, once))
    except KeyboardInterrupt:
        click.echo("Stopped.", err=True)
