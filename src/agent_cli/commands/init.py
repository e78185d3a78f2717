"""Init command for creating the .agent.json manifest."""

import click

from agent_cli.context import AgentContext
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.errors import ManifestExists
from agent_cli.interactive import interactive_select
from agent_cli.io.manifest import (
    LEGACY_MANIFEST_FILE,
    get_manifest_path,
    manifest_exists,
    save_manifest,
)
from agent_cli.io.registry import load_registry
from agent_cli.models.manifest import Manifest
from agent_cli.operations.resolution import resolve
from agent_cli.output import user_output
from agent_cli.paths import validate_relative_path


@click.command()
@click.argument("source", required=False)
@click.option("--ref", help="Tag, branch or commit to pin (default: latest tag).")
@click.option("--output", "-o", "output_dir", help="Directory skills are installed into.")
@click.option("--agent-output", help="Path of the composed agent instructions file.")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing manifest.")
@click.option("--interactive", "-i", is_flag=True, help="Pick entries from the registry.")
@click.pass_obj
@cli_error_boundary
def init(
    agent_ctx: AgentContext,
    source: str | None,
    ref: str | None,
    output_dir: str | None,
    agent_output: str | None,
    force: bool,
    interactive: bool,
) -> None:
    """Create .agent.json pointing at SOURCE (e.g. github:user/repo).

    Without --ref the manifest is pinned to the source's latest tag, or to
    its default branch head when it has no tags. Use --force to overwrite an
    existing manifest.
    """
    project_dir = agent_ctx.cwd
    manifest_path = get_manifest_path(project_dir)
    legacy_path = project_dir / LEGACY_MANIFEST_FILE

    if manifest_exists(project_dir) and not force:
        raise ManifestExists(manifest_path if manifest_path.exists() else legacy_path)

    chosen_output = output_dir or agent_ctx.global_config.default_output_dir
    validate_relative_path(chosen_output, "--output")
    if agent_output is not None:
        validate_relative_path(agent_output, "--agent-output")

    chosen_source = source or agent_ctx.global_config.default_source
    if chosen_source is None:
        raise ValueError(
            "No source given and no default_source configured\n"
            "Usage: agent init github:<owner>/<repo>"
        )

    provider = agent_ctx.source_provider
    chosen_ref = ref if ref is not None else provider.latest_ref(chosen_source)

    include: list[str] = []
    if interactive:
        snapshot = provider.resolve_snapshot(chosen_source, chosen_ref)
        registry = load_registry(snapshot.local_root)
        include = interactive_select(registry)
        resolve(include, registry, snapshot.local_root)

    manifest = Manifest(
        source=chosen_source,
        ref=chosen_ref,
        output_dir=chosen_output,
        include=include,
        agent_output=agent_output,
    )
    save_manifest(project_dir, manifest)
    if legacy_path.exists():
        legacy_path.unlink()

    user_output(f"Created {manifest_path.name} ({chosen_source}@{chosen_ref})")
    if not include:
        user_output("\nAdd entries with:")
        user_output("  agent add <category>/<key>")
    user_output("\nThen install them with:")
    user_output("  agent install")
