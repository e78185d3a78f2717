"""Interactive selection of registry entries."""

import click

from agent_cli.models.registry import Registry
from agent_cli.output import user_output


def interactive_select(registry: Registry, exclude: frozenset[str] = frozenset()) -> list[str]:
    """Walk the registry and ask which entries to select.

    For each category the user is first offered the whole category as a
    glob; declining asks per entry. Selectors in `exclude` are not offered.

    Returns:
        Selected selectors ("category/*" or "category/key") in registry order
    """
    selected: list[str] = []
    user_output("Browse and select skills & agent instructions.\n")

    for category_id, category in registry.categories.items():
        keys = [key for key in category.entries if f"{category_id}/{key}" not in exclude]
        if not keys:
            continue

        kind = "agents" if category.type == "agent" else "skills"
        user_output(click.style(f"{category.name}", bold=True) + f" ({kind})")
        user_output(click.style(f"  {category.description}", dim=True))

        glob = f"{category_id}/*"
        if glob not in exclude and click.confirm(f"Add all {glob}?", default=False, err=True):
            selected.append(glob)
            user_output(f"  + {glob}\n")
            continue

        for key in keys:
            selector = f"{category_id}/{key}"
            folder = category.entries[key]
            if click.confirm(f"  {selector} ({folder})", default=False, err=True):
                selected.append(selector)
                user_output(f"    + {selector}")
        user_output()

    if selected:
        user_output(f"Selected {len(selected)} item(s)")
    return selected
