"""covrelay CLI - covrelay command."""

import click

from covrelay.cli.report import report_command
from covrelay.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="covrelay")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """covrelay - Multi-module coverage reporting to Codacy."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(report_command, name="report")


if __name__ == "__main__":
    cli()
