"""Reconciliation engine: compute and apply change-sets.

A change-set lists, for every path the tool is responsible for, whether
bringing the project in line with the manifest adds, modifies, removes or
leaves it alone. The kind of an entry depends only on whether the path is a
current target, whether it exists on disk, and whether the contents match.

Targets come from three places:
- skill entries: every file of the entry's folder, copied to
  <outputDir>/<folderName>/...
- agent entries: one composed document at the format's agent output path
- prompts of every category with a resolved entry, copied to
  <outputDir>/prompts/<categoryId>/<promptFile>

A file that is not a target is removed only when the tool owns it: it was
recorded by the previous install, or it sits under a folder (or prompt slot)
the current registry defines. Anything else under the output directory is
left alone.
"""

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from agent_cli.errors import AmbiguousFolder, SourceFolderMissing
from agent_cli.io.atomic import write_bytes_atomic
from agent_cli.models.changeset import ChangeKind, ChangeSet, ChangeSetEntry
from agent_cli.models.registry import Registry
from agent_cli.models.resolved import ResolvedEntry
from agent_cli.operations.composition import compose
from agent_cli.paths import is_safe_relative, validate_relative_path

logger = logging.getLogger(__name__)

PROMPTS_DIR = "prompts"


@dataclass(frozen=True)
class ComposePlan:
    """Where and how the change-set places its targets."""

    output_dir: str  # Project-relative skills directory
    agent_output: str  # Project-relative path of the composed document
    agent_format: str = "plain"
    local_override: str | None = None
    previously_installed: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        validate_relative_path(self.output_dir, "output directory")
        validate_relative_path(self.agent_output, "agent output")


@dataclass(frozen=True)
class StagedFile:
    """Content staged in memory for one target path."""

    content: bytes
    sections: tuple[str, ...] = ()


@dataclass(frozen=True)
class ApplyResult:
    """Counts of what apply_change_set did."""

    added: int
    modified: int
    removed: int
    unchanged: int


def content_hash(content: bytes) -> str:
    """sha256 hex digest used to compare source and installed files."""
    return hashlib.sha256(content).hexdigest()


def join_relative(*parts: str) -> str:
    """Join project-relative parts into a normalized POSIX path."""
    return PurePosixPath(*parts).as_posix()


def _folder_files(folder: Path) -> list[Path]:
    return sorted((p for p in folder.rglob("*") if p.is_file()), key=lambda p: p.as_posix())


def _stage(
    staged: dict[str, StagedFile],
    origins: dict[str, str],
    path: str,
    item: StagedFile,
    origin: str,
) -> None:
    if path in staged:
        raise AmbiguousFolder(path, [origins[path], origin])
    staged[path] = item
    origins[path] = origin


def stage_targets(
    resolved: list[ResolvedEntry],
    registry: Registry,
    snapshot_root: Path,
    plan: ComposePlan,
) -> dict[str, StagedFile]:
    """Read every target's content into memory, keyed by path in change-set order.

    Nothing is written here, so a failure leaves the project untouched.

    Raises:
        SourceFolderMissing: If an entry folder or declared prompt file is absent
        AmbiguousFolder: If two skill entries from different paths share a folder name,
            or two targets land on the same path
    """
    staged: dict[str, StagedFile] = {}
    origins: dict[str, str] = {}
    agent_entries = [entry for entry in resolved if entry.type == "agent"]
    folder_owners: dict[str, ResolvedEntry] = {}
    composed = False

    for entry in resolved:
        if entry.type == "agent":
            if not composed:
                document = compose(agent_entries, plan.local_override, plan.agent_format)
                _stage(
                    staged,
                    origins,
                    join_relative(plan.agent_output),
                    StagedFile(
                        content=document.encode("utf-8"),
                        sections=tuple(agent.selector for agent in agent_entries),
                    ),
                    "agent composition",
                )
                composed = True
            continue

        if not entry.folder_path.is_dir():
            raise SourceFolderMissing(entry.selector, entry.folder_path)

        owner = folder_owners.get(entry.folder_name)
        if owner is not None:
            if owner.folder_path != entry.folder_path:
                raise AmbiguousFolder(entry.folder_name, [owner.selector, entry.selector])
            # Two keys pointing at the same folder copy it once
            continue
        folder_owners[entry.folder_name] = entry

        for source_file in _folder_files(entry.folder_path):
            relative = source_file.relative_to(entry.folder_path).as_posix()
            path = join_relative(plan.output_dir, entry.folder_name, relative)
            _stage(
                staged, origins, path, StagedFile(content=source_file.read_bytes()), entry.selector
            )

    for category_id in dict.fromkeys(entry.category_id for entry in resolved):
        category = registry.categories[category_id]
        if not category.prompts:
            continue
        prompts_dir = snapshot_root / (category.prompts_path or category.path)
        for key, filename in category.prompts.items():
            source_file = prompts_dir / filename
            if not source_file.is_file():
                raise SourceFolderMissing(
                    f"{category_id}/{key}", source_file, "prompt file not found"
                )
            path = join_relative(plan.output_dir, PROMPTS_DIR, category_id, filename)
            _stage(
                staged,
                origins,
                path,
                StagedFile(content=source_file.read_bytes()),
                f"{category_id}/{key}",
            )

    return staged


def find_owned_paths(
    project_dir: Path, registry: Registry, plan: ComposePlan
) -> set[str]:
    """Existing files the tool may remove.

    Ownership is the explicit record of the previous install plus files under
    <outputDir>/<folder> for skill folders the registry defines, plus known
    prompt files under <outputDir>/prompts/<category>/.
    """
    owned = {path for path in plan.previously_installed if is_safe_relative(path)}

    for folder_name in registry.skill_folder_names():
        folder = project_dir / plan.output_dir / folder_name
        if not folder.is_dir():
            continue
        for installed_file in _folder_files(folder):
            owned.add(installed_file.relative_to(project_dir).as_posix())

    for category_id, category in registry.categories.items():
        for filename in category.prompts.values():
            path = join_relative(plan.output_dir, PROMPTS_DIR, category_id, filename)
            if (project_dir / path).is_file():
                owned.add(path)

    return owned


def compute_change_set(
    resolved: list[ResolvedEntry],
    registry: Registry,
    snapshot_root: Path,
    project_dir: Path,
    plan: ComposePlan,
) -> ChangeSet:
    """Compute the ordered change-set that reconciles the project with `resolved`.

    Order: additions and modifications in resolved-entry order, then removals
    sorted by path, then unchanged entries in resolved-entry order.

    Args:
        resolved: Entries from selector resolution, in manifest order
        registry: Registry the entries were resolved against
        snapshot_root: Local root of the source snapshot
        project_dir: Project root the target paths are relative to
        plan: Output locations, override content and the ownership record

    Raises:
        SourceFolderMissing: If the snapshot lacks a folder the registry references
        AmbiguousFolder: If two categories install the same folder name
    """
    staged = stage_targets(resolved, registry, snapshot_root, plan)

    changes: list[ChangeSetEntry] = []
    unchanged: list[ChangeSetEntry] = []
    for path, item in staged.items():
        source_hash = content_hash(item.content)
        on_disk = project_dir / path
        if not on_disk.is_file():
            changes.append(
                ChangeSetEntry(
                    path=path,
                    kind=ChangeKind.ADD,
                    source_hash=source_hash,
                    content=item.content,
                    sections=item.sections,
                )
            )
            continue

        existing_hash = content_hash(on_disk.read_bytes())
        entry = ChangeSetEntry(
            path=path,
            kind=ChangeKind.UNCHANGED if existing_hash == source_hash else ChangeKind.MODIFY,
            source_hash=source_hash,
            existing_hash=existing_hash,
            content=item.content,
            sections=item.sections,
        )
        if entry.kind == ChangeKind.UNCHANGED:
            unchanged.append(entry)
        else:
            changes.append(entry)

    removals: list[ChangeSetEntry] = []
    for path in sorted(find_owned_paths(project_dir, registry, plan) - staged.keys()):
        on_disk = project_dir / path
        if not on_disk.is_file():
            continue
        removals.append(
            ChangeSetEntry(
                path=path,
                kind=ChangeKind.REMOVE,
                source_hash=None,
                existing_hash=content_hash(on_disk.read_bytes()),
            )
        )

    logger.debug(
        "Change-set: %d changed, %d removed, %d unchanged",
        len(changes),
        len(removals),
        len(unchanged),
    )
    return ChangeSet(entries=changes + removals + unchanged)


def _prune_empty_dirs(start: Path, stop: Path) -> None:
    current = start
    while current != stop and stop in current.parents:
        if any(current.iterdir()):
            return
        current.rmdir()
        current = current.parent


def apply_change_set(change_set: ChangeSet, project_dir: Path, output_dir: str) -> ApplyResult:
    """Write additions/modifications, then delete removals.

    Content was staged in memory by compute_change_set. Each file is written
    through a temporary sibling and renamed into place. Directories emptied by
    removals are pruned up to (not including) the output directory.
    """
    output_root = project_dir / output_dir
    added = modified = removed = unchanged = 0

    for entry in change_set.entries:
        target = project_dir / entry.path
        if entry.kind in (ChangeKind.ADD, ChangeKind.MODIFY):
            if entry.content is None:
                raise ValueError(f"No staged content for {entry.path}")
            write_bytes_atomic(target, entry.content)
            logger.debug("%s %s", entry.kind.marker, entry.path)
            if entry.kind == ChangeKind.ADD:
                added += 1
            else:
                modified += 1
        elif entry.kind == ChangeKind.REMOVE:
            if target.is_file():
                target.unlink()
                logger.debug("- %s", entry.path)
                removed += 1
            if output_root in target.parents:
                _prune_empty_dirs(target.parent, output_root)
        else:
            unchanged += 1

    return ApplyResult(added=added, modified=modified, removed=removed, unchanged=unchanged)


def render_report(change_set: ChangeSet) -> list[str]:
    """One "<marker> <path>" line per change-set entry."""
    return [f"{entry.kind.marker} {entry.path}" for entry in change_set.entries]
