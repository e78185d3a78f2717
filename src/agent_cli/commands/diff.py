"""Diff command: show what install would change, without changing anything."""

from pathlib import Path

import click

from agent_cli.context import AgentContext
from agent_cli.error_boundary import cli_error_boundary
from agent_cli.io.manifest import load_manifest
from agent_cli.models.changeset import ChangeKind, ChangeSetEntry
from agent_cli.operations.changeset import render_report
from agent_cli.operations.composition import (
    FORMAT_TARGETS,
    ComposedSection,
    diff_sections,
    parse_sections,
)
from agent_cli.operations.pipeline import build_plan
from agent_cli.output import machine_output, styled_warning, user_output


def section_lines(project_dir: Path, entry: ChangeSetEntry) -> list[str]:
    """Per-section markers for a composed document that would be added or modified."""
    if entry.kind not in (ChangeKind.ADD, ChangeKind.MODIFY) or entry.content is None:
        return []
    existing: list[ComposedSection] = []
    if entry.kind == ChangeKind.MODIFY:
        existing = parse_sections((project_dir / entry.path).read_text(encoding="utf-8"))
    composed = parse_sections(entry.content.decode("utf-8"))
    return [
        f"    {marker} {name}"
        for marker, name in diff_sections(existing, composed)
        if marker != "="
    ]


@click.command()
@click.option(
    "--format",
    "agent_format",
    type=click.Choice(list(FORMAT_TARGETS)),
    default=None,
    help="Tool to compare agent instructions for (default: previous install's, else plain).",
)
@click.option("--verbose", "-v", is_flag=True, help="Show section-level changes of agent files.")
@click.pass_obj
@cli_error_boundary
def diff(agent_ctx: AgentContext, agent_format: str | None, verbose: bool) -> None:
    """Show pending changes: + add, ~ modify, - remove, = unchanged.

    Unknown selectors are reported as warnings next to a partial report.
    """
    project_dir = agent_ctx.cwd
    manifest = load_manifest(project_dir)
    plan = build_plan(
        project_dir, manifest, agent_ctx.source_provider, agent_format, strict=False
    )

    for error in plan.errors:
        user_output(styled_warning(str(error)))

    lines = render_report(plan.change_set)
    for entry, line in zip(plan.change_set.entries, lines, strict=True):
        machine_output(line)
        if verbose and entry.sections:
            for detail in section_lines(project_dir, entry):
                machine_output(detail)

    change_set = plan.change_set
    user_output(
        f"{len(change_set.by_kind(ChangeKind.ADD))} to add, "
        f"{len(change_set.by_kind(ChangeKind.MODIFY))} to update, "
        f"{len(change_set.by_kind(ChangeKind.REMOVE))} to remove, "
        f"{len(change_set.by_kind(ChangeKind.UNCHANGED))} unchanged"
    )
