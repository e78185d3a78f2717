"""Production source provider backed by the git CLI."""

import hashlib
import logging
import re
from pathlib import Path

from agent_cli.errors import RefNotFound, SourceUnavailable
from agent_cli.integrations.source import SourceProvider, SourceSnapshot
from agent_cli.locking import cache_lock
from agent_cli.subprocess_utils import run_subprocess_with_context

logger = logging.getLogger(__name__)

GITHUB_PREFIX = "github:"


def source_url(source: str) -> str:
    """Translate a source reference into something `git clone` accepts.

    "github:user/repo" becomes the GitHub HTTPS URL; URLs and local paths
    pass through unchanged.
    """
    if source.startswith(GITHUB_PREFIX):
        slug = source[len(GITHUB_PREFIX) :].strip("/")
        if slug.count("/") != 1:
            raise SourceUnavailable(source, "expected github:<owner>/<repo>")
        return f"https://github.com/{slug}.git"
    return source


def cache_key(source: str) -> str:
    """Directory name of a source inside the cache: readable slug plus short hash."""
    slug = re.sub(r"[^A-Za-z0-9._-]+", "-", source).strip("-")[:60]
    digest = hashlib.sha256(source.encode("utf-8")).hexdigest()[:12]
    return f"{slug}-{digest}"


class GitSourceProvider(SourceProvider):
    """Clones each source once into the cache directory and fetches on reuse.

    Every clone, fetch and checkout runs under an exclusive lock on the
    source's cache entry.
    """

    def __init__(self, cache_dir: Path) -> None:
        self._cache_dir = cache_dir

    def repo_dir(self, source: str) -> Path:
        """Cache directory holding the clone of `source`."""
        return self._cache_dir / cache_key(source)

    def resolve_snapshot(self, source: str, ref: str) -> SourceSnapshot:
        """Fetch `source` and check out `ref` in its cache entry."""
        repo_dir = self.repo_dir(source)
        with cache_lock(repo_dir):
            self._sync(source, repo_dir)
            commit = self._rev_parse(repo_dir, ref)
            if commit is None:
                raise RefNotFound(source, ref)
            self._git(
                ["checkout", "--quiet", "--force", "--detach", commit],
                repo_dir,
                source,
                f"check out {ref}",
            )
        logger.debug("Resolved %s@%s to %s in %s", source, ref, commit, repo_dir)
        return SourceSnapshot(local_root=repo_dir, resolved_ref=commit)

    def latest_ref(self, source: str) -> str:
        """Newest tag by version order, else the commit of the default branch head."""
        repo_dir = self.repo_dir(source)
        with cache_lock(repo_dir):
            self._sync(source, repo_dir)
            tags = self._git(
                ["tag", "--list", "--sort=-v:refname"], repo_dir, source, "list tags"
            ).splitlines()
            if tags:
                return tags[0].strip()
            # Tries origin/HEAD (the default branch) before the local HEAD
            head = self._rev_parse(repo_dir, "HEAD")
            if head is None:
                raise SourceUnavailable(source, "repository has no commits")
            return head

    def _sync(self, source: str, repo_dir: Path) -> None:
        if (repo_dir / ".git").is_dir():
            logger.debug("Fetching %s into %s", source, repo_dir)
            self._git(
                ["fetch", "--quiet", "--tags", "--force", "--prune", "origin"],
                repo_dir,
                source,
                "fetch source",
            )
            return

        logger.debug("Cloning %s into %s", source, repo_dir)
        repo_dir.parent.mkdir(parents=True, exist_ok=True)
        self._git(
            ["clone", "--quiet", source_url(source), str(repo_dir)],
            repo_dir.parent,
            source,
            "clone source",
        )

    def _rev_parse(self, repo_dir: Path, ref: str) -> str | None:
        # Remote branches first: a local branch of the same name is never fast-forwarded
        for candidate in (f"origin/{ref}", ref):
            result = run_subprocess_with_context(
                ["git", "rev-parse", "--verify", "--quiet", f"{candidate}^{{commit}}"],
                f"resolve ref {candidate}",
                cwd=repo_dir,
                check=False,
            )
            if result.returncode == 0 and result.stdout.strip():
                return result.stdout.strip()
        return None

    def _git(self, args: list[str], cwd: Path, source: str, operation: str) -> str:
        try:
            result = run_subprocess_with_context(["git", *args], operation, cwd=cwd)
        except RuntimeError as e:
            raise SourceUnavailable(source, str(e)) from e
        return result.stdout
