"""mpkg CLI - Command-line interface for manifest-driven package resolution."""

import logging

import click

from . import __version__
from .commands.deps import deps as deps_group
from .commands.init import init_cmd
from .commands.resolve import resolve_cmd
from .commands.run import run_cmd
from .logging_setup import init_logging

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="mpkg")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (default: MPKG_LOG_LEVEL or WARNING)",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Append JSONL log records to this file")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, log_file: str | None):
    """mpkg - resolve declared packages from the project's packages directory."""
    init_logging(level=log_level, path=log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(init_cmd)
cli.add_command(deps_group)
cli.add_command(resolve_cmd)
cli.add_command(run_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
