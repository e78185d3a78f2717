"""Lookup of prompt documents published by registry categories."""

from dataclasses import dataclass
from pathlib import Path

from agent_cli.errors import PromptNotFound
from agent_cli.io.frontmatter import describe, strip_frontmatter
from agent_cli.models.registry import Registry


@dataclass(frozen=True)
class PromptRef:
    """One prompt file inside a source snapshot."""

    category_id: str
    key: str
    path: Path

    @property
    def reference(self) -> str:
        return f"{self.category_id}/{self.key}"

    def read(self) -> str:
        """Full file content, frontmatter included."""
        return self.path.read_text(encoding="utf-8")

    def body(self) -> str:
        """Content without frontmatter."""
        return strip_frontmatter(self.read())

    def description(self) -> str:
        """Frontmatter description or first heading, empty if neither exists."""
        if not self.path.is_file():
            return ""
        return describe(self.read()) or ""


def list_prompts(registry: Registry, snapshot_root: Path) -> list[PromptRef]:
    """Every prompt of every category, in registry order."""
    prompts: list[PromptRef] = []
    for category_id, category in registry.categories.items():
        prompts_dir = snapshot_root / (category.prompts_path or category.path)
        for key, filename in category.prompts.items():
            prompts.append(PromptRef(category_id=category_id, key=key, path=prompts_dir / filename))
    return prompts


def find_prompt(registry: Registry, snapshot_root: Path, reference: str) -> PromptRef:
    """Find a prompt by "category/key", or by bare key when exactly one category has it.

    Raises:
        PromptNotFound: If nothing matches, the bare key is ambiguous, or the file is absent
    """
    prompts = list_prompts(registry, snapshot_root)
    if "/" in reference:
        matches = [prompt for prompt in prompts if prompt.reference == reference]
    else:
        matches = [prompt for prompt in prompts if prompt.key == reference]

    if len(matches) != 1 or not matches[0].path.is_file():
        raise PromptNotFound(reference)
    return matches[0]
