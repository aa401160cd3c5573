"""Stacklens CLI entry point: Click group with subcommands."""

import logging

import click

from stacklens import __version__


@click.group()
@click.version_option(version=__version__, prog_name="stacklens")
@click.option("-v", "--verbose", is_flag=True, help="Log analysis details")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors")
def cli(verbose: bool, quiet: bool) -> None:
    """Stacklens - find CSS stacking contexts and z-index values that do nothing."""
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from stacklens.cli.check import check  # noqa: E402
from stacklens.cli.inspect import inspect  # noqa: E402
from stacklens.cli.fix import fix  # noqa: E402
from stacklens.cli.watch import watch  # noqa: E402

cli.add_command(check)
cli.add_command(inspect)
cli.add_command(fix)
cli.add_command(watch)
