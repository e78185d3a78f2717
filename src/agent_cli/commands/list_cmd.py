"""List command for showing selected or available registry entries."""

import click
from rich.console import Console
from rich.table import Table

from agent_cli.context import AgentContext
from agent_cli.context_helpers import load_remote
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.operations.resolution import resolve_best_effort
from agent_cli.output import machine_output, styled_warning, user_output


@click.command(name="list")
@click.option("--remote", "-r", is_flag=True, help="List every entry the registry offers.")
@click.pass_obj
@cli_error_boundary
def list_entries(agent_ctx: AgentContext, remote: bool) -> None:
    """List the entries selected in .agent.json.

    With --remote, list every registry entry and mark the selected ones.
    """
    state = load_remote(agent_ctx)
    manifest = state.manifest
    registry = state.registry
    resolved, errors = resolve_best_effort(manifest.include, registry, state.snapshot.local_root)

    if remote:
        included = {entry.selector for entry in resolved}
        table = Table(show_header=True, header_style="bold")
        table.add_column("selector", style="cyan", no_wrap=True)
        table.add_column("type", no_wrap=True)
        table.add_column("folder", no_wrap=True)
        table.add_column("status", no_wrap=True)
        for selector in registry.list_all_selectors():
            category_id, key = selector.split("/", 1)
            category = registry.categories[category_id]
            status = "[green]included[/green]" if selector in included else "available"
            table.add_row(selector, category.type, category.entries[key], status)

        console = Console(width=120)
        console.print(table)
        user_output(f"Registry v{registry.version} at {manifest.source}@{manifest.ref}")
        return

    for error in errors:
        user_output(styled_warning(str(error)))

    if not resolved:
        user_output("No entries selected. Add some with: agent add <category>/<key>")
        return

    for entry in resolved:
        machine_output(f"{entry.selector:<40} {entry.type}")
    user_output(f"{len(resolved)} entr{'y' if len(resolved) == 1 else 'ies'} selected")
