"""
Command-line interface for tf-azurerm.
"""

import click

from . import __version__
from .commands import subscriptions, upgrade_state


@click.group()
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    help="Logging level",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug output including the configuration summary",
)
@click.version_option(__version__, prog_name="tf-azurerm")
@click.pass_context
def cli(ctx: click.Context, log_level: str, debug: bool) -> None:
    """tf-azurerm - Azure provider state upgrades and data sources."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = "DEBUG" if debug else log_level.upper()
    ctx.obj["debug"] = debug


cli.add_command(subscriptions)
cli.add_command(upgrade_state)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
