"""Output helpers with clear intent.

- user_output: diagnostics and progress for humans (stderr)
- machine_output: data meant to be piped or captured (stdout)
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Write data to stdout."""
    click.echo(message, nl=nl)


def styled_error(message: str) -> str:
    """Prefix a message with a red "Error: " label."""
    return click.style("Error: ", fg="red") + message


def styled_warning(message: str) -> str:
    """Prefix a message with a yellow "Warning: " label."""
    return click.style("Warning: ", fg="yellow") + message
