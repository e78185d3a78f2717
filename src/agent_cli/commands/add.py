"""Add command: append selectors to the manifest."""

import click

from agent_cli.context import AgentContext
from agent_cli.context_helpers import load_remote
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.interactive import interactive_select
from agent_cli.io.manifest import save_manifest
from agent_cli.operations.resolution import merge_selectors, resolve
from agent_cli.output import user_output


@click.command()
@click.argument("selectors", nargs=-1)
@click.pass_obj
@cli_error_boundary
def add(agent_ctx: AgentContext, selectors: tuple[str, ...]) -> None:
    """Add SELECTORS (category/key or category/*) to .agent.json.

    Every selector is checked against the registry first; if any is unknown,
    all problems are reported and the manifest is left unchanged. Without
    arguments, entries are picked interactively.
    """
    state = load_remote(agent_ctx)
    manifest = state.manifest

    requested = list(selectors)
    if not requested:
        requested = interactive_select(state.registry, exclude=frozenset(manifest.include))
        if not requested:
            user_output("Nothing selected")
            return

    resolve(requested, state.registry, state.snapshot.local_root)

    merged, added = merge_selectors(manifest.include, requested)
    for selector in requested:
        if selector not in added:
            user_output(f"  = {selector} (already included)")

    if not added:
        user_output("Manifest unchanged")
        return

    save_manifest(agent_ctx.cwd, manifest.with_include(merged))
    for selector in added:
        user_output(f"  + {selector}")
    user_output("Run 'agent install' to apply.")
