import logging
import os

import click

from agent_cli.commands.add import add
from agent_cli.commands.completions import completions
from agent_cli.commands.config import config_group
from agent_cli.commands.create import create
from agent_cli.commands.diff import diff
from agent_cli.commands.init import init
from agent_cli.commands.install import install
from agent_cli.commands.list_cmd import list_entries
from agent_cli.commands.preset import preset
from agent_cli.commands.prompt import prompt_group
from agent_cli.commands.remove import remove
from agent_cli.commands.update import update
from agent_cli.context import create_context
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.version import __version__

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV_VAR = "AGENT_CLI_DEBUG"
DEBUG_FORMAT = "[DEBUG %(name)s:%(lineno)d] %(message)s"


def debug_requested(flag: bool) -> bool:
    """Whether debug output is on: the --debug flag or AGENT_CLI_DEBUG=1."""
    return flag or os.environ.get(DEBUG_ENV_VAR, "") not in ("", "0")


def configure_logging(debug: bool) -> None:
    """Route agent_cli log records to stderr; DEBUG level when debugging."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format=DEBUG_FORMAT)
    else:
        logging.basicConfig(level=logging.WARNING, format="%(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="agent")
@click.option("--debug", is_flag=True, help="Show debug logging and full tracebacks.")
@click.pass_context
@cli_error_boundary
def cli(ctx: click.Context, debug: bool) -> None:
    """Fetch skills, agent instructions and prompts from a registry into this project."""
    debug = debug_requested(debug)
    configure_logging(debug)
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(debug=debug)


# Register all commands
cli.add_command(init)
cli.add_command(install)
cli.add_command(diff)
cli.add_command(list_entries)
cli.add_command(update)
cli.add_command(add)
cli.add_command(remove)
cli.add_command(preset)
cli.add_command(create)
cli.add_command(prompt_group)
cli.add_command(completions)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `agent` console script."""
    cli()


if __name__ == "__main__":
    main()
