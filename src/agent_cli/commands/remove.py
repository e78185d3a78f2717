"""Remove command: drop selectors from the manifest."""

import click

from agent_cli.context import AgentContext
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.io.manifest import MANIFEST_FILE, load_manifest, save_manifest
from agent_cli.output import styled_warning, user_output


@click.command()
@click.argument("selectors", nargs=-1, required=True)
@click.pass_obj
@cli_error_boundary
def remove(agent_ctx: AgentContext, selectors: tuple[str, ...]) -> None:
    """Remove SELECTORS from .agent.json.

    Selectors are matched literally against the include list. Installed files
    are removed by the next `agent install`.
    """
    project_dir = agent_ctx.cwd
    manifest = load_manifest(project_dir)

    missing = [s for s in dict.fromkeys(selectors) if s not in manifest.include]
    if len(missing) == len(set(selectors)):
        raise ValueError(f"Not in {MANIFEST_FILE}: {', '.join(missing)}")
    for selector in missing:
        user_output(styled_warning(f"{selector} is not in the manifest"))

    remaining = [selector for selector in manifest.include if selector not in selectors]
    save_manifest(project_dir, manifest.with_include(remaining))
    for selector in manifest.include:
        if selector in selectors:
            user_output(f"  - {selector}")
    user_output("Run 'agent install' to apply.")
