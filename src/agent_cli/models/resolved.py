"""Resolved selector models."""

from dataclasses import dataclass
from pathlib import Path

from agent_cli.models.registry import CategoryType


@dataclass(frozen=True)
class ResolvedEntry:
    """A selector expanded into one concrete registry entry."""

    category_id: str
    key: str
    folder_name: str
    folder_path: Path  # Absolute, inside the source snapshot
    type: CategoryType

    @property
    def selector(self) -> str:
        """The canonical "category/key" form of this entry."""
        return f"{self.category_id}/{self.key}"
