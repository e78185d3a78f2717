"""Selector resolution against a loaded registry.

Selectors take two forms:
- "category/key": one entry; the category and the key must both exist
- "category/*": every key of the category, in the category's declared order

Resolution performs no I/O. Results are deduplicated by (category, key),
keeping the first occurrence, so repeating a selector is a no-op.
"""

from pathlib import Path

from agent_cli.errors import (
    SelectorErrors,
    UnknownCategory,
    UnknownPreset,
    UnknownSelector,
)
from agent_cli.models.registry import Registry, RegistryCategory
from agent_cli.models.resolved import ResolvedEntry

GLOB_SUFFIX = "/*"


def _make_entry(
    category_id: str, category: RegistryCategory, key: str, snapshot_root: Path
) -> ResolvedEntry:
    folder_name = category.entries[key]
    return ResolvedEntry(
        category_id=category_id,
        key=key,
        folder_name=folder_name,
        folder_path=snapshot_root / category.path / folder_name,
        type=category.type,
    )


def expand_selector(
    selector: str, registry: Registry, snapshot_root: Path
) -> list[ResolvedEntry]:
    """Expand a single selector into resolved entries.

    Raises:
        UnknownCategory: If the selector's category is not in the registry
        UnknownSelector: If the key is missing or the selector is malformed
    """
    if selector.endswith(GLOB_SUFFIX):
        category_id = selector[: -len(GLOB_SUFFIX)]
        if "*" in category_id or "/" in category_id or not category_id:
            raise UnknownSelector(selector, "only 'category/*' globs are supported")
        if category_id not in registry.categories:
            raise UnknownCategory(category_id, selector)
        category = registry.categories[category_id]
        return [_make_entry(category_id, category, key, snapshot_root) for key in category.entries]

    if "*" in selector:
        raise UnknownSelector(selector, "only 'category/*' globs are supported")

    if "/" not in selector:
        raise UnknownSelector(selector, "expected 'category/key' or 'category/*'")

    category_id, key = selector.split("/", 1)
    if category_id not in registry.categories:
        raise UnknownCategory(category_id, selector)
    category = registry.categories[category_id]
    if key not in category.entries:
        raise UnknownSelector(selector, f"no key '{key}' in category '{category_id}'")
    return [_make_entry(category_id, category, key, snapshot_root)]


def resolve_best_effort(
    selectors: list[str], registry: Registry, snapshot_root: Path = Path()
) -> tuple[list[ResolvedEntry], list[UnknownSelector]]:
    """Resolve selectors, collecting errors instead of raising.

    Used by read-only commands (list, diff) that prefer a partial report
    over no report.

    Returns:
        Tuple of (resolved entries in first-occurrence order, errors in input order)
    """
    resolved: list[ResolvedEntry] = []
    errors: list[UnknownSelector] = []
    seen: set[tuple[str, str]] = set()

    for selector in selectors:
        try:
            expanded = expand_selector(selector, registry, snapshot_root)
        except UnknownSelector as e:
            errors.append(e)
            continue

        for entry in expanded:
            identity = (entry.category_id, entry.key)
            if identity in seen:
                continue
            seen.add(identity)
            resolved.append(entry)

    return resolved, errors


def resolve(
    selectors: list[str], registry: Registry, snapshot_root: Path = Path()
) -> list[ResolvedEntry]:
    """Resolve selectors into an ordered, deduplicated list of entries.

    Every selector is checked before failing, so all problems surface at once.

    Args:
        selectors: Selector strings in manifest order
        registry: Loaded registry
        snapshot_root: Root of the source snapshot, used to build folder paths

    Raises:
        UnknownCategory / UnknownSelector: If exactly one selector fails
        SelectorErrors: If several selectors fail
    """
    resolved, errors = resolve_best_effort(selectors, registry, snapshot_root)
    if len(errors) == 1:
        raise errors[0]
    if errors:
        raise SelectorErrors(errors)
    return resolved


def expand_preset(registry: Registry, preset_name: str) -> list[str]:
    """Return the selectors bundled under a preset name.

    Raises:
        UnknownPreset: If the registry has no such preset
    """
    if preset_name not in registry.presets:
        raise UnknownPreset(preset_name, sorted(registry.presets))
    return list(registry.presets[preset_name])


def merge_selectors(include: list[str], additions: list[str]) -> tuple[list[str], list[str]]:
    """Append selectors not already present.

    Returns:
        Tuple of (new include list, selectors actually added)
    """
    merged = list(include)
    added: list[str] = []
    for selector in additions:
        if selector in merged:
            continue
        merged.append(selector)
        added.append(selector)
    return merged, added
