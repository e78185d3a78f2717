"""Tests for change-set computation and application."""

from pathlib import Path

import pytest

from agent_cli.errors import AmbiguousFolder, SourceFolderMissing
from agent_cli.io.registry import load_registry
from agent_cli.models.changeset import ChangeKind, ChangeSet
from agent_cli.models.registry import Registry
from agent_cli.models.resolved import ResolvedEntry
from agent_cli.operations.changeset import (
    ComposePlan,
    apply_change_set,
    compute_change_set,
    is_safe_relative,
    render_report,
)
from agent_cli.operations.resolution import resolve
from tests.test_utils.snapshot_builder import SnapshotBuilder

OUT = "out"


def _plan(**overrides) -> ComposePlan:
    fields = {"output_dir": OUT, "agent_output": "agent.md"}
    fields.update(overrides)
    return ComposePlan(**fields)


def _compute(
    selectors: list[str],
    snapshot_root: Path,
    project_dir: Path,
    plan: ComposePlan | None = None,
) -> tuple[ChangeSet, list[ResolvedEntry], Registry]:
    registry = load_registry(snapshot_root)
    resolved = resolve(selectors, registry, snapshot_root)
    change_set = compute_change_set(
        resolved, registry, snapshot_root, project_dir, plan if plan is not None else _plan()
    )
    return change_set, resolved, registry


def _kinds(change_set: ChangeSet) -> list[tuple[str, str]]:
    return [(entry.kind.marker, entry.path) for entry in change_set.entries]


def test_development_and_agents_scenario(tmp_path: Path, tmp_project: Path) -> None:
    """Test skills plus one agent against an empty output directory."""
    builder = SnapshotBuilder(tmp_path / "scenario")
    builder.add_category("development")
    builder.add_entry("development", "git", "git", {"SKILL.md": "# Git\n"})
    builder.add_entry("development", "architecture", "architecture", {"SKILL.md": "# Arch\n"})
    builder.add_category("agents", type="agent")
    builder.add_entry("agents", "nextjs", "nextjs", {"agent.md": "Next.js agent\n"})
    snapshot_root = builder.build()

    change_set, resolved, _ = _compute(
        ["development/*", "agents/nextjs"], snapshot_root, tmp_project
    )

    assert [entry.selector for entry in resolved] == [
        "development/git",
        "development/architecture",
        "agents/nextjs",
    ]
    assert _kinds(change_set) == [
        ("+", "out/git/SKILL.md"),
        ("+", "out/architecture/SKILL.md"),
        ("+", "agent.md"),
    ]
    composed = change_set.entries[2]
    assert composed.sections == ("agents/nextjs",)
    assert composed.existing_hash is None


def test_order_composed_at_first_agent_then_prompts(
    snapshot_root: Path, tmp_project: Path
) -> None:
    """Test entry order: composed file at its first agent entry, prompts after all entries."""
    change_set, _, _ = _compute(
        ["agents/reviewer", "development/testing", "agents/planner"], snapshot_root, tmp_project
    )

    assert _kinds(change_set) == [
        ("+", "agent.md"),
        ("+", "out/testing/SKILL.md"),
        ("+", "out/prompts/development/review.md"),
    ]
    assert change_set.entries[0].sections == ("agents/reviewer", "agents/planner")


def test_skill_files_are_sorted_within_an_entry(snapshot_root: Path, tmp_project: Path) -> None:
    change_set, _, _ = _compute(["development/nextjs"], snapshot_root, tmp_project)

    assert [entry.path for entry in change_set.entries][:2] == [
        "out/nextjs-app/SKILL.md",
        "out/nextjs-app/examples/page.md",
    ]


def test_no_agent_entries_means_no_composed_target(
    snapshot_root: Path, tmp_project: Path
) -> None:
    change_set, _, _ = _compute(["development/testing"], snapshot_root, tmp_project)
    assert "agent.md" not in [entry.path for entry in change_set.entries]


def test_modified_and_unchanged_files(snapshot_root: Path, tmp_project: Path) -> None:
    """Test classification against files already on disk."""
    (tmp_project / OUT / "testing").mkdir(parents=True)
    (tmp_project / OUT / "testing" / "SKILL.md").write_text("# Testing\n", encoding="utf-8")
    (tmp_project / OUT / "nextjs-app").mkdir(parents=True)
    (tmp_project / OUT / "nextjs-app" / "SKILL.md").write_text("edited\n", encoding="utf-8")

    change_set, _, _ = _compute(["development/*"], snapshot_root, tmp_project)

    assert _kinds(change_set) == [
        ("~", "out/nextjs-app/SKILL.md"),
        ("+", "out/nextjs-app/examples/page.md"),
        ("+", "out/prompts/development/review.md"),
        ("=", "out/testing/SKILL.md"),
    ]
    modified = change_set.entries[0]
    assert modified.existing_hash is not None
    assert modified.existing_hash != modified.source_hash


def test_diff_then_install_then_diff_is_all_unchanged(
    snapshot_root: Path, tmp_project: Path
) -> None:
    """Test that applying a change-set and recomputing yields only unchanged entries."""
    selectors = ["development/*", "agents/*"]
    change_set, _, _ = _compute(selectors, snapshot_root, tmp_project)

    apply_change_set(change_set, tmp_project, OUT)
    recomputed, _, _ = _compute(
        selectors,
        snapshot_root,
        tmp_project,
        _plan(previously_installed=frozenset(change_set.target_paths())),
    )

    assert recomputed.entries
    assert not recomputed.has_changes
    assert [entry.path for entry in recomputed.entries] == change_set.target_paths()


def test_deselected_skill_folder_is_removed(snapshot_root: Path, tmp_project: Path) -> None:
    """Test that files of a known skill folder no longer selected are removed."""
    first, _, _ = _compute(["development/*"], snapshot_root, tmp_project)
    apply_change_set(first, tmp_project, OUT)

    second, _, _ = _compute(["development/testing"], snapshot_root, tmp_project)

    assert ("-", "out/nextjs-app/SKILL.md") in _kinds(second)
    assert ("-", "out/nextjs-app/examples/page.md") in _kinds(second)
    assert ("-", "out/prompts/development/review.md") not in _kinds(second)


def test_removals_are_sorted_and_follow_changes(snapshot_root: Path, tmp_project: Path) -> None:
    first, _, _ = _compute(["development/nextjs", "agents/reviewer"], snapshot_root, tmp_project)
    apply_change_set(first, tmp_project, OUT)

    second, _, _ = _compute(
        ["development/testing"],
        snapshot_root,
        tmp_project,
        _plan(previously_installed=frozenset(first.target_paths())),
    )

    assert _kinds(second) == [
        ("+", "out/testing/SKILL.md"),
        ("-", "agent.md"),
        ("-", "out/nextjs-app/SKILL.md"),
        ("-", "out/nextjs-app/examples/page.md"),
        ("=", "out/prompts/development/review.md"),
    ]


def test_user_files_are_never_removed(snapshot_root: Path, tmp_project: Path) -> None:
    """Test that files the tool does not own survive, even inside the output dir."""
    notes = tmp_project / OUT / "my-notes" / "notes.md"
    notes.parent.mkdir(parents=True)
    notes.write_text("mine", encoding="utf-8")
    (tmp_project / "agent.md").write_text("hand-written", encoding="utf-8")

    change_set, _, _ = _compute(["development/testing"], snapshot_root, tmp_project)
    apply_change_set(change_set, tmp_project, OUT)

    assert all(entry.kind != ChangeKind.REMOVE for entry in change_set.entries)
    assert notes.read_text(encoding="utf-8") == "mine"
    assert (tmp_project / "agent.md").read_text(encoding="utf-8") == "hand-written"


def test_recorded_paths_outside_project_are_ignored(
    snapshot_root: Path, tmp_project: Path
) -> None:
    """Test that a tampered ownership record cannot reach outside the project."""
    outside = tmp_project.parent / "outside.md"
    outside.write_text("keep", encoding="utf-8")

    change_set, _, _ = _compute(
        ["development/testing"],
        snapshot_root,
        tmp_project,
        _plan(previously_installed=frozenset({"../outside.md", str(outside)})),
    )

    assert all(entry.kind != ChangeKind.REMOVE for entry in change_set.entries)
    assert not is_safe_relative("../outside.md")
    assert is_safe_relative("out/testing/SKILL.md")


def test_apply_prunes_empty_folders_inside_output_dir(
    snapshot_root: Path, tmp_project: Path
) -> None:
    first, _, _ = _compute(["development/nextjs"], snapshot_root, tmp_project)
    apply_change_set(first, tmp_project, OUT)

    second, _, _ = _compute(["development/testing"], snapshot_root, tmp_project)
    result = apply_change_set(second, tmp_project, OUT)

    assert result.removed == 2
    assert result.added == 1
    assert not (tmp_project / OUT / "nextjs-app").exists()
    assert (tmp_project / OUT).is_dir()


def test_local_override_changes_only_composed_file(snapshot_root: Path, tmp_project: Path) -> None:
    first, _, _ = _compute(["agents/*"], snapshot_root, tmp_project)
    apply_change_set(first, tmp_project, OUT)

    second, _, _ = _compute(
        ["agents/*"], snapshot_root, tmp_project, _plan(local_override="Project rules\n")
    )

    assert _kinds(second) == [("~", "agent.md")]


def test_missing_source_folder_aborts(tmp_path: Path, tmp_project: Path) -> None:
    """Test that a registry entry without a folder fails before anything is written."""
    builder = SnapshotBuilder(tmp_path / "broken")
    builder.add_category("development")
    builder.add_entry("development", "ghost", "ghost")
    snapshot_root = builder.build()

    with pytest.raises(SourceFolderMissing) as exc_info:
        _compute(["development/ghost"], snapshot_root, tmp_project)

    assert "development/ghost" in str(exc_info.value)
    assert list(tmp_project.iterdir()) == []


def test_missing_prompt_file_aborts(tmp_path: Path, tmp_project: Path) -> None:
    builder = SnapshotBuilder(tmp_path / "broken")
    builder.add_category("development")
    builder.add_entry("development", "git", "git", {"SKILL.md": "# Git\n"})
    builder.add_prompt("development", "commit", "commit.md", None)
    snapshot_root = builder.build()

    with pytest.raises(SourceFolderMissing, match="prompt file not found"):
        _compute(["development/git"], snapshot_root, tmp_project)


def test_same_folder_name_from_two_categories_is_ambiguous(
    tmp_path: Path, tmp_project: Path
) -> None:
    """Test that two categories installing the same folder name raise AmbiguousFolder."""
    builder = SnapshotBuilder(tmp_path / "clash")
    builder.add_category("frontend")
    builder.add_entry("frontend", "testing", "testing", {"SKILL.md": "# FE testing\n"})
    builder.add_category("backend")
    builder.add_entry("backend", "testing", "testing", {"SKILL.md": "# BE testing\n"})
    snapshot_root = builder.build()

    with pytest.raises(AmbiguousFolder) as exc_info:
        _compute(["frontend/*", "backend/*"], snapshot_root, tmp_project)

    assert exc_info.value.selectors == ["frontend/testing", "backend/testing"]


def test_two_keys_for_one_folder_copy_it_once(tmp_path: Path, tmp_project: Path) -> None:
    builder = SnapshotBuilder(tmp_path / "alias")
    builder.add_category("development")
    builder.add_entry("development", "git", "git", {"SKILL.md": "# Git\n"})
    builder.add_entry("development", "vcs", "git")
    snapshot_root = builder.build()

    change_set, _, _ = _compute(["development/*"], snapshot_root, tmp_project)

    assert _kinds(change_set) == [("+", "out/git/SKILL.md")]


def test_render_report_lines(snapshot_root: Path, tmp_project: Path) -> None:
    change_set, _, _ = _compute(["development/testing"], snapshot_root, tmp_project)

    assert render_report(change_set) == [
        "+ out/testing/SKILL.md",
        "+ out/prompts/development/review.md",
    ]


@pytest.mark.parametrize(
    ("output_dir", "agent_output"),
    [("../outside", "agent.md"), ("/tmp/skills", "agent.md"), (OUT, "../AGENTS.md")],
)
def test_compose_plan_rejects_paths_outside_project(output_dir: str, agent_output: str) -> None:
    with pytest.raises(ValueError, match="must be a relative path"):
        ComposePlan(output_dir=output_dir, agent_output=agent_output)


def test_skill_folder_colliding_with_prompts_is_ambiguous(
    tmp_path: Path, tmp_project: Path
) -> None:
    """Test that a skill folder named like the prompts folder cannot shadow a prompt file."""
    builder = SnapshotBuilder(tmp_path / "shadow")
    builder.add_category("development")
    builder.add_entry(
        "development", "prompts", "prompts", {"development/review.md": "Shadowed\n"}
    )
    builder.add_prompt("development", "review", "review.md", "Review carefully.\n")
    snapshot_root = builder.build()

    with pytest.raises(AmbiguousFolder) as exc_info:
        _compute(["development/prompts"], snapshot_root, tmp_project)

    assert exc_info.value.selectors == ["development/prompts", "development/review"]
    assert "out/prompts/development/review.md" in str(exc_info.value)
    assert not (tmp_project / OUT).exists()
