"""Update command: re-pin the manifest to a newer ref."""

import click

from agent_cli.context import AgentContext
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.io.manifest import load_manifest, save_manifest
from agent_cli.output import user_output


@click.command()
@click.option("--ref", help="Ref to pin (default: the source's latest tag).")
@click.pass_obj
@cli_error_boundary
def update(agent_ctx: AgentContext, ref: str | None) -> None:
    """Pin .agent.json to the latest (or given) ref of its source.

    Only the manifest changes; run `agent install` afterwards to apply.
    """
    project_dir = agent_ctx.cwd
    manifest = load_manifest(project_dir)
    provider = agent_ctx.source_provider

    new_ref = ref if ref is not None else provider.latest_ref(manifest.source)
    if new_ref == manifest.ref:
        user_output(f"Already at {manifest.source}@{new_ref}")
        return

    # Fails with RefNotFound before the manifest is touched
    provider.resolve_snapshot(manifest.source, new_ref)

    save_manifest(project_dir, manifest.with_ref(new_ref))
    user_output(f"Updated {manifest.source}: {manifest.ref} → {new_ref}")
    user_output("Run 'agent install' to apply.")
