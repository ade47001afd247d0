"""CLI entry point for routine-intel."""

import click

from cli.commands import ask, core, dashboard, db, serve
from cli.config import load_config_model
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Routine Intel - scores, trends and advice from your tracker data."""
    config = load_config_model()
    setup_logging(
        json_mode=config.logging.json_mode,
        level="DEBUG" if verbose else config.logging.level,
    )


cli.add_command(dashboard)
cli.add_command(core)
cli.add_command(ask)
cli.add_command(db)
cli.add_command(serve)


if __name__ == "__main__":
    cli()
