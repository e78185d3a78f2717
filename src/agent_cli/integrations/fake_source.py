"""In-memory source provider for tests."""

from pathlib import Path

from agent_cli.errors import RefNotFound, SourceUnavailable
from agent_cli.integrations.source import SourceProvider, SourceSnapshot


class FakeSourceProvider(SourceProvider):
    """Serves pre-built snapshot directories instead of cloning.

    Constructor injection with keyword args; calls are recorded for
    assertions.
    """

    def __init__(
        self,
        *,
        roots: dict[str, Path] | None = None,
        refs: dict[str, list[str]] | None = None,
        latest: dict[str, str] | None = None,
    ) -> None:
        """Create a FakeSourceProvider.

        Args:
            roots: Source reference -> snapshot directory
            refs: Source reference -> refs that exist (any ref is accepted when absent)
            latest: Source reference -> value returned by latest_ref
        """
        self._roots = roots if roots is not None else {}
        self._refs = refs if refs is not None else {}
        self._latest = latest if latest is not None else {}
        self._resolved: list[tuple[str, str]] = []

    @property
    def resolved(self) -> list[tuple[str, str]]:
        """(source, ref) pairs passed to resolve_snapshot, in call order."""
        return list(self._resolved)

    def resolve_snapshot(self, source: str, ref: str) -> SourceSnapshot:
        if source not in self._roots:
            raise SourceUnavailable(source, "unknown source")
        known = self._refs.get(source)
        if known is not None and ref not in known:
            raise RefNotFound(source, ref)
        self._resolved.append((source, ref))
        return SourceSnapshot(local_root=self._roots[source], resolved_ref=ref)

    def latest_ref(self, source: str) -> str:
        if source not in self._roots:
            raise SourceUnavailable(source, "unknown source")
        return self._latest.get(source, "main")
