"""Install command: bring the project in line with the manifest."""

import click

from agent_cli.context import AgentContext
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.io.gitignore import GitignoreMode, ensure_gitignored
from agent_cli.io.manifest import load_manifest
from agent_cli.io.state import save_install_state
from agent_cli.models.changeset import ChangeKind
from agent_cli.models.manifest import InstallState
from agent_cli.operations.changeset import apply_change_set
from agent_cli.operations.composition import FORMAT_TARGETS
from agent_cli.operations.pipeline import build_plan, generated_paths
from agent_cli.output import user_output


def choose_gitignore_mode(
    configured: GitignoreMode, no_gitignore: bool, strict_gitignore: bool
) -> GitignoreMode:
    """Gitignore guard mode for this run: flags override the configured mode.

    Raises:
        ValueError: If both flags are given
    """
    if no_gitignore and strict_gitignore:
        raise ValueError("--no-gitignore and --strict-gitignore cannot be combined")
    if no_gitignore:
        return "off"
    if strict_gitignore:
        return "strict"
    return configured


@click.command()
@click.option(
    "--format",
    "agent_format",
    type=click.Choice(list(FORMAT_TARGETS)),
    default=None,
    help="Tool to write agent instructions for (default: previous install's, else plain).",
)
@click.option("--no-gitignore", is_flag=True, help="Don't touch .gitignore.")
@click.option(
    "--strict-gitignore",
    is_flag=True,
    help="Fail instead of editing .gitignore when generated paths are not ignored.",
)
@click.pass_obj
@cli_error_boundary
def install(
    agent_ctx: AgentContext,
    agent_format: str | None,
    no_gitignore: bool,
    strict_gitignore: bool,
) -> None:
    """Install the entries selected in .agent.json.

    Adds and updates skill folders, the composed agent instructions file and
    prompts, then removes files a previous install wrote that are no longer
    selected. Files the tool did not write are never touched.
    """
    project_dir = agent_ctx.cwd
    mode = choose_gitignore_mode(agent_ctx.global_config.gitignore, no_gitignore, strict_gitignore)

    manifest = load_manifest(project_dir)
    plan = build_plan(
        project_dir, manifest, agent_ctx.source_provider, agent_format, strict=True
    )

    appended = ensure_gitignored(project_dir, generated_paths(plan), mode)

    result = apply_change_set(plan.change_set, project_dir, manifest.output_dir)
    save_install_state(
        project_dir,
        InstallState(
            resolved_ref=plan.snapshot.resolved_ref,
            format=plan.compose_plan.agent_format,
            files=plan.change_set.target_paths(),
        ),
    )

    for entry in plan.change_set.entries:
        if entry.kind != ChangeKind.UNCHANGED:
            user_output(f"  {entry.kind.marker} {entry.path}")
    if appended:
        user_output(f"Added to .gitignore: {', '.join(appended)}")

    if not plan.change_set.has_changes:
        user_output(f"Already up to date ({manifest.source}@{manifest.ref})")
        return

    user_output(
        f"Installed {manifest.source}@{manifest.ref}: "
        f"{result.added} added, {result.modified} updated, "
        f"{result.removed} removed, {result.unchanged} unchanged"
    )
