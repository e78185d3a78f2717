"""Source provider abstraction: turns a source reference into a local snapshot.

This abstraction lets commands run against an in-memory fake in tests
instead of cloning repositories.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SourceSnapshot:
    """A checked-out copy of a source repository at one ref."""

    local_root: Path
    resolved_ref: str  # Commit the requested ref pointed at


class SourceProvider(ABC):
    """Abstract interface for fetching source repositories."""

    @abstractmethod
    def resolve_snapshot(self, source: str, ref: str) -> SourceSnapshot:
        """Fetch `source` and check out `ref`.

        Args:
            source: Source reference, e.g. "github:user/repo", a git URL or a local path
            ref: Tag, branch or commit to check out

        Returns:
            Snapshot whose local_root holds registry.json and the content folders

        Raises:
            SourceUnavailable: If the repository cannot be fetched
            RefNotFound: If the ref does not exist in the repository
        """
        ...

    @abstractmethod
    def latest_ref(self, source: str) -> str:
        """Return the newest tag of `source`, or its default branch head if untagged.

        Raises:
            SourceUnavailable: If the repository cannot be fetched
        """
        ...
