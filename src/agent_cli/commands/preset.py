"""Preset command: add a named bundle of selectors."""

import click
from rich.console import Console
from rich.table import Table

from agent_cli.context import AgentContext
from agent_cli.context_helpers import load_remote
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.io.manifest import save_manifest
from agent_cli.models.registry import Registry
from agent_cli.operations.resolution import expand_preset, merge_selectors, resolve
from agent_cli.output import user_output


def print_presets(registry: Registry) -> None:
    if not registry.presets:
        user_output("The registry defines no presets")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("preset", style="cyan", no_wrap=True)
    table.add_column("selectors")
    for name, selectors in registry.presets.items():
        table.add_row(name, ", ".join(selectors))
    Console(width=120).print(table)


@click.command()
@click.argument("name", required=False)
@click.option("--list", "-l", "list_presets", is_flag=True, help="List available presets.")
@click.pass_obj
@cli_error_boundary
def preset(agent_ctx: AgentContext, name: str | None, list_presets: bool) -> None:
    """Add the selectors of preset NAME to .agent.json."""
    state = load_remote(agent_ctx)
    registry = state.registry

    if list_presets or name is None:
        print_presets(registry)
        return

    selectors = expand_preset(registry, name)
    resolve(selectors, registry, state.snapshot.local_root)

    merged, added = merge_selectors(state.manifest.include, selectors)
    if not added:
        user_output(f"Preset '{name}' is already fully included")
        return

    save_manifest(agent_ctx.cwd, state.manifest.with_include(merged))
    user_output(f"Applied preset '{name}':")
    for selector in added:
        user_output(f"  + {selector}")
    user_output("Run 'agent install' to apply.")
