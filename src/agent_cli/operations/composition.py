"""Composition of agent-typed entries into one instruction document.

The composed document is plain markdown with HTML comment markers around
each section, so a later run can tell which registry entry produced which
part of the file:

    <!-- agent-cli:begin agents/nextjs -->
    ...contents of agents/nextjs/agent.md...
    <!-- agent-cli:end agents/nextjs -->

Composition is a pure function of the ordered entries and their file
contents; composing twice yields byte-identical output.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

from agent_cli.errors import SourceFolderMissing
from agent_cli.models.manifest import Manifest
from agent_cli.models.resolved import ResolvedEntry

AgentFormat = Literal["plain", "copilot", "cursor", "claude"]

AGENT_INSTRUCTIONS_FILE = "agent.md"
DEFAULT_AGENT_OUTPUT = "agent.md"
LOCAL_OVERRIDE_FILE = ".agent.local.md"
LOCAL_SECTION = "local"

GENERATED_HEADER = (
    "<!-- Generated by agent-cli from .agent.json. Do not edit: changes are overwritten "
    "by `agent install`. Put project-specific instructions in .agent.local.md. -->"
)

# Destination path per tool; None means "use the manifest's agentOutput"
FORMAT_TARGETS: dict[str, str | None] = {
    "plain": None,
    "copilot": ".github/copilot-instructions.md",
    "cursor": ".cursorrules",
    "claude": "CLAUDE.md",
}

_SECTION_PATTERN = re.compile(
    r"^<!-- agent-cli:begin (?P<name>\S+) -->\n(?P<body>.*?)\n<!-- agent-cli:end (?P=name) -->$",
    re.DOTALL | re.MULTILINE,
)


@dataclass(frozen=True)
class ComposedSection:
    """One delimited section of a composed document."""

    name: str  # "category/key", or "local" for the override section
    body: str


def validate_agent_format(value: str) -> AgentFormat:
    """Validate and return an agent output format.

    Raises:
        ValueError: If value is not a known format
    """
    if value not in FORMAT_TARGETS:
        known = ", ".join(FORMAT_TARGETS)
        raise ValueError(f"Unknown agent format: {value} (expected one of {known})")
    return cast(AgentFormat, value)


def agent_output_path(agent_format: str, manifest: Manifest) -> str:
    """Project-relative destination of the composed document for a format."""
    target = FORMAT_TARGETS[validate_agent_format(agent_format)]
    if target is not None:
        return target
    return manifest.agent_output or DEFAULT_AGENT_OUTPUT


def find_instructions_file(entry: ResolvedEntry) -> Path:
    """Locate the instruction file of an agent entry.

    Prefers agent.md; otherwise the first markdown file in sorted order.

    Raises:
        SourceFolderMissing: If the folder is absent or holds no markdown
    """
    if not entry.folder_path.is_dir():
        raise SourceFolderMissing(entry.selector, entry.folder_path)

    preferred = entry.folder_path / AGENT_INSTRUCTIONS_FILE
    if preferred.is_file():
        return preferred

    candidates = sorted(p for p in entry.folder_path.glob("*.md") if p.is_file())
    if not candidates:
        raise SourceFolderMissing(
            entry.selector, entry.folder_path, "no markdown instructions in folder"
        )
    return candidates[0]


def render_section(name: str, body: str) -> str:
    """Wrap a body in begin/end markers."""
    return f"<!-- agent-cli:begin {name} -->\n{body.rstrip()}\n<!-- agent-cli:end {name} -->"


def compose(
    agent_entries: list[ResolvedEntry],
    local_override: str | None = None,
    agent_format: str = "plain",
) -> str:
    """Concatenate agent instructions into one document.

    Args:
        agent_entries: Agent-typed entries in resolved order
        local_override: Content of the project's override file, appended last
        agent_format: Target tool; only validated, it never changes the content

    Returns:
        The composed markdown document, ending with a single newline

    Raises:
        SourceFolderMissing: If an entry's instructions cannot be found
    """
    validate_agent_format(agent_format)

    sections: list[str] = []
    for entry in agent_entries:
        instructions = find_instructions_file(entry)
        body = instructions.read_text(encoding="utf-8").replace("\r\n", "\n")
        sections.append(render_section(entry.selector, body))

    if local_override is not None and local_override.strip():
        sections.append(render_section(LOCAL_SECTION, local_override.replace("\r\n", "\n")))

    return GENERATED_HEADER + "\n\n" + "\n\n".join(sections) + "\n"


def parse_sections(document: str) -> list[ComposedSection]:
    """Recover the sections of a composed document, in order.

    Text outside markers (the header, hand edits) is ignored.
    """
    return [
        ComposedSection(name=match.group("name"), body=match.group("body"))
        for match in _SECTION_PATTERN.finditer(document.replace("\r\n", "\n"))
    ]


def diff_sections(
    existing: list[ComposedSection], composed: list[ComposedSection]
) -> list[tuple[str, str]]:
    """Section-level differences between two composed documents.

    Returns:
        (marker, section name) pairs: "+" new, "-" dropped, "~" changed, "=" same;
        composed order first, then dropped sections in their old order
    """
    old = {section.name: section.body for section in existing}
    new_names = {section.name for section in composed}

    result: list[tuple[str, str]] = []
    for section in composed:
        if section.name not in old:
            result.append(("+", section.name))
        elif old[section.name] != section.body:
            result.append(("~", section.name))
        else:
            result.append(("=", section.name))
    for section in existing:
        if section.name not in new_names:
            result.append(("-", section.name))
    return result
