"""Manifest file I/O for .agent.json (with .skills.json migration)."""

import logging
from pathlib import Path

from pydantic import ValidationError

from agent_cli.errors import MalformedManifest, ManifestMissing
from agent_cli.io.atomic import write_json_atomic
from agent_cli.io.validation import describe_validation_error
from agent_cli.models.manifest import Manifest
from agent_cli.output import user_output

logger = logging.getLogger(__name__)

MANIFEST_FILE = ".agent.json"
LEGACY_MANIFEST_FILE = ".skills.json"


def get_manifest_path(project_dir: Path) -> Path:
    """Path of the canonical manifest for a project."""
    return project_dir / MANIFEST_FILE


def manifest_exists(project_dir: Path) -> bool:
    """Check whether a manifest exists, under either the canonical or legacy name."""
    return (project_dir / MANIFEST_FILE).exists() or (project_dir / LEGACY_MANIFEST_FILE).exists()


def load_manifest(project_dir: Path) -> Manifest:
    """Load .agent.json from the project directory.

    Falls back to the legacy .skills.json. A legacy manifest is migrated: the
    canonical file is written first and the legacy file deleted afterwards, so
    there is never a moment with no manifest on disk.

    Raises:
        ManifestMissing: If neither file exists
        MalformedManifest: If the file is not a valid manifest
    """
    manifest_path = project_dir / MANIFEST_FILE
    legacy_path = project_dir / LEGACY_MANIFEST_FILE

    if manifest_path.exists():
        return _parse_manifest(manifest_path)

    if legacy_path.exists():
        user_output(f"Migrating {LEGACY_MANIFEST_FILE} → {MANIFEST_FILE}...")
        manifest = _parse_manifest(legacy_path)
        save_manifest(project_dir, manifest)
        legacy_path.unlink()
        logger.debug("Migrated %s to %s", legacy_path, manifest_path)
        return manifest

    raise ManifestMissing(project_dir, MANIFEST_FILE)


def save_manifest(project_dir: Path, manifest: Manifest) -> Path:
    """Save the manifest as .agent.json and return its path."""
    manifest_path = project_dir / MANIFEST_FILE
    write_json_atomic(manifest_path, manifest.to_json_dict())
    return manifest_path


def _parse_manifest(path: Path) -> Manifest:
    try:
        return Manifest.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise MalformedManifest(path, describe_validation_error(e)) from e
    except UnicodeDecodeError as e:
        raise MalformedManifest(path, f"not valid UTF-8 ({e.reason})") from e
