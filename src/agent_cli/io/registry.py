"""Registry I/O."""

import logging
from pathlib import Path

from pydantic import ValidationError

from agent_cli.errors import MalformedRegistry, RegistryNotFound
from agent_cli.io.validation import describe_validation_error
from agent_cli.models.registry import Registry

logger = logging.getLogger(__name__)

REGISTRY_FILE = "registry.json"


def load_registry(snapshot_root: Path) -> Registry:
    """Load registry.json from the root of a source snapshot.

    Args:
        snapshot_root: Local root of the fetched source repository

    Returns:
        The validated Registry

    Raises:
        RegistryNotFound: If the snapshot has no registry.json
        MalformedRegistry: If the document is not valid JSON or has the wrong shape
    """
    registry_path = snapshot_root / REGISTRY_FILE
    if not registry_path.exists():
        raise RegistryNotFound(registry_path)

    try:
        registry = Registry.model_validate_json(registry_path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise MalformedRegistry(registry_path, describe_validation_error(e)) from e
    except UnicodeDecodeError as e:
        raise MalformedRegistry(registry_path, f"not valid UTF-8 ({e.reason})") from e

    logger.debug(
        "Loaded registry v%s with %d categories from %s",
        registry.version,
        len(registry.categories),
        registry_path,
    )
    return registry
