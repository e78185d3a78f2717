"""agent-cli: pull skills, prompts and agent instructions into a project.

Import from submodules:
- version: __version__
- operations.resolution: resolve, resolve_best_effort
- operations.changeset: compute_change_set, apply_change_set
- operations.composition: compose, FORMAT_TARGETS
"""

from agent_cli.version import __version__ as __version__
