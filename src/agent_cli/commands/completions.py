"""Completions command for printing shell completion scripts."""

import click

from agent_cli.error_boundary import cli_error_boundary
from agent_cli.operations.completions import completion_script
from agent_cli.output import machine_output


@click.command()
@click.argument("shell")
@click.pass_context
@cli_error_boundary
def completions(ctx: click.Context, shell: str) -> None:
    """Print the completion script for SHELL (bash, zsh or fish).

    \b
    Examples:
      eval "$(agent completions zsh)"
      agent completions fish > ~/.config/fish/completions/agent.fish
    """
    script = completion_script(ctx.find_root().command, shell)
    machine_output(script)
