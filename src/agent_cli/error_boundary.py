"""Error boundary handling for CLI commands.

This module provides a decorator to catch well-known exceptions at CLI entry
points and display clean error messages without stack traces.
"""

import functools
import logging
from collections.abc import Callable
from typing import Any

import click

from agent_cli.errors import AgentCliError
from agent_cli.output import styled_error, user_output

logger = logging.getLogger(__name__)


def cli_error_boundary[T: Callable[..., Any]](func: T) -> T:
    """Decorator that catches well-known exceptions and displays clean error messages.

    Apply it to CLI command entry points below the click decorators.

    Catches:
        - AgentCliError: Every failure in the agent-cli error taxonomy
        - FileExistsError: File/directory conflicts
        - FileNotFoundError: Missing files/directories
        - ValueError: Invalid input or configuration
        - PermissionError: Permission denied errors

    Each prints "Error: <message>" to stderr and exits with code 1. With
    --debug the traceback is logged as well. All other exceptions bubble up
    normally with full stack traces.

    Example:
        @click.command()
        @cli_error_boundary
        def my_command():
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (
            AgentCliError,
            FileExistsError,
            FileNotFoundError,
            ValueError,
            PermissionError,
        ) as e:
            logger.debug("Command failed", exc_info=True)
            user_output(styled_error(str(e)))
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
