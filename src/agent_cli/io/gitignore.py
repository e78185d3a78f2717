"""Keep generated paths listed in the project's .gitignore."""

from pathlib import Path
from typing import Literal, cast

from agent_cli.errors import GitignoreConflict

GitignoreMode = Literal["auto", "strict", "off"]

GITIGNORE_HEADER = "# agent-cli generated files"


def validate_gitignore_mode(value: str) -> GitignoreMode:
    """Validate and return a gitignore guard mode.

    Raises:
        ValueError: If value is not a valid mode
    """
    if value not in ("auto", "strict", "off"):
        raise ValueError(f"Invalid gitignore mode: {value}")
    return cast(GitignoreMode, value)


def _normalize(pattern: str) -> str:
    return pattern.strip().strip("/")


def find_unignored(gitignore_path: Path, paths: list[str]) -> list[str]:
    """Return the paths not already covered by an exact or parent-directory entry.

    Only literal entries are understood; glob patterns are never assumed to
    match, so a path is reported unless it is listed explicitly.
    """
    listed: set[str] = set()
    if gitignore_path.exists():
        for line in gitignore_path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or stripped.startswith("!"):
                continue
            listed.add(_normalize(stripped))

    missing: list[str] = []
    for path in paths:
        normalized = _normalize(path)
        parts = normalized.split("/")
        covered = any("/".join(parts[: i + 1]) in listed for i in range(len(parts)))
        if not covered and path not in missing:
            missing.append(path)
    return missing


def ensure_gitignored(project_dir: Path, paths: list[str], mode: GitignoreMode) -> list[str]:
    """Apply the gitignore guard for generated paths.

    Args:
        project_dir: Project root holding .gitignore
        paths: Generated paths relative to the project root (directories end in "/")
        mode: "auto" appends missing entries, "strict" fails on them, "off" does nothing

    Returns:
        Entries appended to .gitignore (empty unless mode is "auto")

    Raises:
        GitignoreConflict: In strict mode, when any path is not ignored
    """
    if mode == "off":
        return []

    gitignore_path = project_dir / ".gitignore"
    missing = find_unignored(gitignore_path, paths)
    if not missing:
        return []

    if mode == "strict":
        raise GitignoreConflict(gitignore_path, missing)

    content = gitignore_path.read_text(encoding="utf-8") if gitignore_path.exists() else ""
    if content and not content.endswith("\n"):
        content += "\n"
    if GITIGNORE_HEADER not in content:
        if content:
            content += "\n"
        content += f"{GITIGNORE_HEADER}\n"
    content += "".join(f"{path}\n" for path in missing)
    gitignore_path.write_text(content, encoding="utf-8")
    return missing
