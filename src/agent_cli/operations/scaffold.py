"""Templates for `agent create`."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from agent_cli.io.frontmatter import render_frontmatter

ScaffoldKind = Literal["agent", "skill"]

NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")

_BODIES: dict[str, str] = {
    "agent": (
        "# {title}\n"
        "\n"
        "## Role\n"
        "\n"
        "Describe what this agent is responsible for.\n"
        "\n"
        "## Guidelines\n"
        "\n"
        "- Add the rules the agent must follow.\n"
    ),
    "skill": (
        "# {title}\n"
        "\n"
        "## When to use\n"
        "\n"
        "Describe the situations this skill applies to.\n"
        "\n"
        "## Steps\n"
        "\n"
        "1. Add the first step.\n"
    ),
}


@dataclass(frozen=True)
class ScaffoldResult:
    """Files written by scaffold_entry."""

    folder: Path
    document: Path


def validate_entry_name(name: str) -> str:
    """Validate a new entry name: lowercase letters, digits, '.', '_' and '-'.

    Raises:
        ValueError: If the name cannot be used as a registry folder
    """
    if not NAME_PATTERN.match(name):
        raise ValueError(
            f"Invalid name: {name!r} (use lowercase letters, digits, '.', '_' or '-')"
        )
    return name


def render_entry(kind: ScaffoldKind, name: str) -> str:
    """Markdown content of a new agent.md or skill.md."""
    title = name.replace("-", " ").replace("_", " ").title()
    fields = {"name": name, "description": f"One-line summary of the {title} {kind}"}
    return render_frontmatter(fields, _BODIES[kind].format(title=title))


def scaffold_entry(kind: ScaffoldKind, name: str, parent_dir: Path) -> ScaffoldResult:
    """Create <parent_dir>/<name>/<kind>.md.

    Raises:
        ValueError: If the name is invalid
        FileExistsError: If the folder already exists
    """
    validate_entry_name(name)
    folder = parent_dir / name
    if folder.exists():
        raise FileExistsError(f"{folder} already exists")

    folder.mkdir(parents=True)
    document = folder / f"{kind}.md"
    document.write_text(render_entry(kind, name), encoding="utf-8")
    return ScaffoldResult(folder=folder, document=document)
