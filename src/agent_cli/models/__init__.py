"""Data models for agent-cli.

Import from submodules:
- registry: CategoryType, Registry, RegistryCategory
- manifest: InstallState, Manifest
- resolved: ResolvedEntry
- changeset: ChangeKind, ChangeSet, ChangeSetEntry
"""
