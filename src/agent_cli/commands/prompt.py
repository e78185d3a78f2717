"""Prompt commands: browse, print and copy registry prompts."""

import click
from rich.console import Console
from rich.table import Table

from agent_cli.context import AgentContext
from agent_cli.context_helpers import load_remote
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.operations.prompts import find_prompt, list_prompts
from agent_cli.output import machine_output, styled_error, user_output


@click.group(name="prompt")
def prompt_group() -> None:
    """Browse prompts published by the registry."""


@prompt_group.command(name="list")
@click.pass_obj
@cli_error_boundary
def list_cmd(agent_ctx: AgentContext) -> None:
    """List every prompt with its description."""
    state = load_remote(agent_ctx)
    prompts = list_prompts(state.registry, state.snapshot.local_root)
    if not prompts:
        user_output("The registry defines no prompts")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("prompt", style="cyan", no_wrap=True)
    table.add_column("description")
    for prompt in prompts:
        table.add_row(prompt.reference, prompt.description())
    Console(width=120).print(table)


@prompt_group.command(name="show")
@click.argument("reference")
@click.pass_obj
@cli_error_boundary
def show_cmd(agent_ctx: AgentContext, reference: str) -> None:
    """Print prompt REFERENCE (category/key, or key when unique)."""
    state = load_remote(agent_ctx)
    prompt = find_prompt(state.registry, state.snapshot.local_root, reference)
    machine_output(prompt.body(), nl=False)


@prompt_group.command(name="copy")
@click.argument("reference")
@click.pass_obj
@cli_error_boundary
def copy_cmd(agent_ctx: AgentContext, reference: str) -> None:
    """Copy prompt REFERENCE to the clipboard."""
    state = load_remote(agent_ctx)
    prompt = find_prompt(state.registry, state.snapshot.local_root, reference)
    try:
        agent_ctx.clipboard.copy(prompt.body())
    except RuntimeError as e:
        user_output(styled_error(str(e)))
        raise SystemExit(1) from None
    user_output(f"Copied {prompt.reference} to the clipboard")
