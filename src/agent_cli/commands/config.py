"""Config commands for reading and writing ~/.agent-cli/config.toml."""

import click

from agent_cli.config import CONFIG_KEYS, config_path, save_global_config
from agent_cli.context import AgentContext
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.output import machine_output, user_output


@click.group(name="config")
def config_group() -> None:
    """Show or change global settings."""


@config_group.command(name="show")
@click.pass_obj
@cli_error_boundary
def show_cmd(agent_ctx: AgentContext) -> None:
    """Print every setting as KEY = VALUE."""
    config = agent_ctx.global_config
    for key in CONFIG_KEYS:
        value = getattr(config, key)
        machine_output(f"{key} = {'' if value is None else value}")


@config_group.command(name="set")
@click.argument("key", type=click.Choice(list(CONFIG_KEYS)))
@click.argument("value")
@click.pass_obj
@cli_error_boundary
def set_cmd(agent_ctx: AgentContext, key: str, value: str) -> None:
    """Set KEY to VALUE in the global config file."""
    updated = agent_ctx.global_config.with_value(key, value)
    written = save_global_config(updated)
    user_output(f"Set {key} = {value} in {written}")


@config_group.command(name="path")
def path_cmd() -> None:
    """Print the location of the global config file."""
    machine_output(str(config_path()))
