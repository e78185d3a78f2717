"""Change-set models produced by the diff engine."""

from dataclasses import dataclass, field
from enum import Enum


class ChangeKind(Enum):
    """What applying a change-set entry does to its path."""

    ADD = "+"
    MODIFY = "~"
    UNCHANGED = "="
    REMOVE = "-"

    @property
    def marker(self) -> str:
        """One-character marker used in diff reports."""
        return self.value


@dataclass(frozen=True)
class ChangeSetEntry:
    """One file operation needed to reconcile the project with the manifest.

    `path` is relative to the project directory and uses POSIX separators.
    `content` holds the staged bytes for additions and modifications; it does
    not take part in equality.
    """

    path: str
    kind: ChangeKind
    source_hash: str | None
    existing_hash: str | None = None
    content: bytes | None = field(default=None, repr=False, compare=False)
    # "category/key" names of composed sections, set only for the composed file
    sections: tuple[str, ...] = ()


@dataclass(frozen=True)
class ChangeSet:
    """Ordered change-set: additions/modifications, removals, then unchanged."""

    entries: list[ChangeSetEntry]

    def by_kind(self, kind: ChangeKind) -> list[ChangeSetEntry]:
        """Entries of one kind, in change-set order."""
        return [entry for entry in self.entries if entry.kind == kind]

    @property
    def has_changes(self) -> bool:
        """Whether applying would touch the filesystem."""
        return any(entry.kind != ChangeKind.UNCHANGED for entry in self.entries)

    def target_paths(self) -> list[str]:
        """Paths that exist after applying (everything except removals)."""
        return [entry.path for entry in self.entries if entry.kind != ChangeKind.REMOVE]
