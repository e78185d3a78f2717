"""The manifest -> snapshot -> resolution -> change-set pipeline.

`install` and `diff` share this path so that the report printed by `diff`
is exactly what `install` applies.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from agent_cli.errors import UnknownSelector
from agent_cli.integrations.source import SourceProvider, SourceSnapshot
from agent_cli.io.registry import load_registry
from agent_cli.io.state import STATE_FILE, load_install_state
from agent_cli.models.changeset import ChangeSet
from agent_cli.models.manifest import InstallState, Manifest
from agent_cli.models.registry import Registry
from agent_cli.models.resolved import ResolvedEntry
from agent_cli.operations.changeset import ComposePlan, compute_change_set
from agent_cli.operations.composition import LOCAL_OVERRIDE_FILE, agent_output_path
from agent_cli.operations.resolution import resolve, resolve_best_effort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallPlan:
    """Everything computed before touching the project."""

    manifest: Manifest
    snapshot: SourceSnapshot
    registry: Registry
    resolved: list[ResolvedEntry]
    errors: list[UnknownSelector]
    compose_plan: ComposePlan
    change_set: ChangeSet

    @property
    def has_agent_entries(self) -> bool:
        return any(entry.type == "agent" for entry in self.resolved)


def read_local_override(project_dir: Path) -> str | None:
    """Content of the project's override file, or None if it doesn't exist."""
    override_path = project_dir / LOCAL_OVERRIDE_FILE
    if not override_path.is_file():
        return None
    return override_path.read_text(encoding="utf-8")


def effective_format(requested: str | None, state: InstallState | None) -> str:
    """Format to use: the requested one, else the previous install's, else plain."""
    if requested is not None:
        return requested
    if state is not None:
        return state.format
    return "plain"


def build_plan(
    project_dir: Path,
    manifest: Manifest,
    source_provider: SourceProvider,
    agent_format: str | None = None,
    *,
    strict: bool,
) -> InstallPlan:
    """Fetch the manifest's source and compute the change-set against the project.

    Args:
        project_dir: Project root
        manifest: Loaded manifest
        source_provider: Provider used to fetch the snapshot
        agent_format: Requested output format, None to reuse the previous install's
        strict: Raise on unknown selectors (install) instead of collecting them (diff)

    Raises:
        SourceUnavailable / RefNotFound: From the source provider
        RegistryNotFound / MalformedRegistry: If the snapshot has no valid registry
        UnknownSelector / SelectorErrors: In strict mode, for unresolvable selectors
        SourceFolderMissing / AmbiguousFolder: From change-set computation
    """
    snapshot = source_provider.resolve_snapshot(manifest.source, manifest.ref)
    registry = load_registry(snapshot.local_root)

    if strict:
        resolved = resolve(manifest.include, registry, snapshot.local_root)
        errors: list[UnknownSelector] = []
    else:
        resolved, errors = resolve_best_effort(manifest.include, registry, snapshot.local_root)

    state = load_install_state(project_dir)
    chosen_format = effective_format(agent_format, state)
    compose_plan = ComposePlan(
        output_dir=manifest.output_dir,
        agent_output=agent_output_path(chosen_format, manifest),
        agent_format=chosen_format,
        local_override=read_local_override(project_dir),
        previously_installed=frozenset(state.files) if state is not None else frozenset(),
    )
    logger.debug(
        "Planning %d entries from %s@%s (format %s)",
        len(resolved),
        manifest.source,
        snapshot.resolved_ref,
        chosen_format,
    )

    change_set = compute_change_set(
        resolved, registry, snapshot.local_root, project_dir, compose_plan
    )
    return InstallPlan(
        manifest=manifest,
        snapshot=snapshot,
        registry=registry,
        resolved=resolved,
        errors=errors,
        compose_plan=compose_plan,
        change_set=change_set,
    )


def generated_paths(plan: InstallPlan) -> list[str]:
    """Paths the .gitignore guard should cover for a plan."""
    paths = [plan.manifest.output_dir.rstrip("/") + "/", STATE_FILE]
    if plan.has_agent_entries:
        paths.append(plan.compose_plan.agent_output)
    return paths
