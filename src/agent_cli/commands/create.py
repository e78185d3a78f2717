"""Create command for scaffolding new registry entries."""

from pathlib import Path

import click

from agent_cli.context import AgentContext
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.operations.scaffold import ScaffoldKind, scaffold_entry
from agent_cli.output import user_output


@click.command()
@click.argument("kind", type=click.Choice(["agent", "skill"]))
@click.argument("name")
@click.option(
    "--dir",
    "parent_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to create the entry folder in (default: current directory).",
)
@click.pass_obj
@cli_error_boundary
def create(
    agent_ctx: AgentContext, kind: ScaffoldKind, name: str, parent_dir: Path | None
) -> None:
    """Scaffold a new KIND entry folder NAME holding agent.md or skill.md.

    The document starts with YAML frontmatter (name, description) followed by
    a markdown outline to fill in.
    """
    target_parent = agent_ctx.cwd / parent_dir if parent_dir is not None else agent_ctx.cwd
    result = scaffold_entry(kind, name, target_parent)
    user_output(f"Created {result.document}")
    user_output(f"Register it under a '{kind}' category of registry.json as \"{name}\".")
