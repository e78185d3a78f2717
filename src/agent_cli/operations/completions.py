"""Shell completion script generation.

Scripts come from click's own shell-completion classes, so completions stay
in sync with the command tree.
"""

import click
from click.shell_completion import get_completion_class

from agent_cli.errors import UnsupportedShell

SUPPORTED_SHELLS = ("bash", "zsh", "fish")
PROG_NAME = "agent"
COMPLETE_VAR = "_AGENT_COMPLETE"


def completion_script(command: click.Command, shell: str) -> str:
    """Return the completion script for `shell`.

    Args:
        command: Root command of the CLI
        shell: One of bash, zsh or fish

    Raises:
        UnsupportedShell: For any other shell
    """
    if shell not in SUPPORTED_SHELLS:
        raise UnsupportedShell(shell)
    completion_class = get_completion_class(shell)
    if completion_class is None:
        raise UnsupportedShell(shell)
    return completion_class(command, {}, PROG_NAME, COMPLETE_VAR).source()
