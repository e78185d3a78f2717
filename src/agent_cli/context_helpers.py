"""Helpers shared by commands that need the manifest or the remote registry."""

from dataclasses import dataclass

from agent_cli.context import AgentContext
from agent_cli.integrations.source import SourceSnapshot
from agent_cli.io.manifest import load_manifest
from agent_cli.io.registry import load_registry
from agent_cli.models.manifest import Manifest
from agent_cli.models.registry import Registry


@dataclass(frozen=True)
class RemoteState:
    """A project's manifest together with the registry it points at."""

    manifest: Manifest
    snapshot: SourceSnapshot
    registry: Registry


def load_remote(agent_ctx: AgentContext, manifest: Manifest | None = None) -> RemoteState:
    """Load the manifest (unless given) and fetch the registry at its pinned ref.

    Raises:
        ManifestMissing / MalformedManifest: If the manifest cannot be loaded
        SourceUnavailable / RefNotFound: From the source provider
        RegistryNotFound / MalformedRegistry: If the snapshot has no valid registry
    """
    loaded = manifest if manifest is not None else load_manifest(agent_ctx.cwd)
    snapshot = agent_ctx.source_provider.resolve_snapshot(loaded.source, loaded.ref)
    registry = load_registry(snapshot.local_root)
    return RemoteState(manifest=loaded, snapshot=snapshot, registry=registry)
