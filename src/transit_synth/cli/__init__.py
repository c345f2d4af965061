"""Command line interface for transit-synth."""

from __future__ import annotations

import click

from transit_synth.cli.common_cli import configure_logging
from transit_synth.cli.generate_cli import describe_command, generate_command


@click.group()
@click.version_option(package_name="transit-synth")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Synthesize small-planet transit light curves."""
    configure_logging(verbose)


cli.add_command(generate_command)
cli.add_command(describe_command)


def main() -> None:
    cli()


__all__ = ["cli", "main"]
