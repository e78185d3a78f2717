"""Frontmatter parsing and rendering for markdown documents."""

import re
from typing import Any

import yaml

FRONTMATTER_PATTERN = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)


def parse_frontmatter(content: str) -> dict[str, Any]:
    """Extract the YAML frontmatter mapping from markdown content.

    Returns an empty dict when there is no frontmatter or it is not a mapping.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return {}

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError:
        return {}

    if not isinstance(data, dict):
        return {}
    return data


def strip_frontmatter(content: str) -> str:
    """Return the markdown body without its frontmatter block."""
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return content
    return content[match.end() :]


def render_frontmatter(fields: dict[str, Any], body: str) -> str:
    """Render a markdown document with the given frontmatter fields."""
    yaml_content = yaml.safe_dump(fields, sort_keys=False, allow_unicode=True).rstrip("\n")
    return f"---\n{yaml_content}\n---\n\n{body}"


def describe(content: str) -> str | None:
    """Short description of a document: frontmatter description or first heading."""
    description = parse_frontmatter(content).get("description")
    if isinstance(description, str) and description.strip():
        return description.strip()

    for line in strip_frontmatter(content).splitlines():
        stripped = line.strip()
        if stripped.startswith("#"):
            return stripped.lstrip("#").strip() or None
    return None
