"""I/O operations for agent-cli."""

from agent_cli.io.manifest import load_manifest, manifest_exists, save_manifest
from agent_cli.io.registry import load_registry
from agent_cli.io.state import load_install_state, save_install_state

__all__ = [
    "load_install_state",
    "load_manifest",
    "load_registry",
    "manifest_exists",
    "save_install_state",
    "save_manifest",
]
