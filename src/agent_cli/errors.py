"""Error taxonomy for agent-cli.

Every error a user can trigger derives from AgentCliError so the CLI error
boundary can print it without a stack trace. Messages always carry the
offending selector, path or category verbatim.

Two classes of failure exist:
- Input errors (UnknownSelector, UnknownCategory, UnknownPreset) are
  collected and reported together where feasible (see SelectorErrors).
- Structural errors (MalformedRegistry, ManifestMissing, SourceFolderMissing,
  ...) abort the command immediately.
"""

from pathlib import Path


class AgentCliError(Exception):
    """Base class for all well-known agent-cli failures."""


class ManifestMissing(AgentCliError):
    """Raised when no manifest (canonical or legacy) exists in the project."""

    def __init__(self, project_dir: Path, manifest_name: str):
        self.project_dir = project_dir
        super().__init__(
            f"No {manifest_name} found in {project_dir}.\nRun 'agent init' to create one."
        )


class ManifestExists(AgentCliError):
    """Raised when init would overwrite an existing manifest."""

    def __init__(self, manifest_path: Path):
        self.manifest_path = manifest_path
        super().__init__(f"{manifest_path} already exists\nUse --force to overwrite")


class MalformedManifest(AgentCliError):
    """Raised when the manifest file cannot be parsed or validated."""

    def __init__(self, manifest_path: Path, detail: str):
        self.manifest_path = manifest_path
        super().__init__(f"Malformed manifest {manifest_path}: {detail}")


class RegistryNotFound(AgentCliError):
    """Raised when the snapshot root holds no registry document."""

    def __init__(self, registry_path: Path):
        self.registry_path = registry_path
        super().__init__(f"No registry found at {registry_path}")


class MalformedRegistry(AgentCliError):
    """Raised when the registry document does not match the expected shape."""

    def __init__(self, registry_path: Path, detail: str):
        self.registry_path = registry_path
        super().__init__(f"Malformed registry {registry_path}: {detail}")


class UnknownSelector(AgentCliError):
    """Raised when a selector names nothing in the registry."""

    def __init__(self, selector: str, reason: str | None = None):
        self.selector = selector
        message = f"Unknown selector '{selector}'"
        if reason is not None:
            message += f": {reason}"
        super().__init__(message)


class UnknownCategory(UnknownSelector):
    """Raised when a selector's category is absent from the registry."""

    def __init__(self, category_id: str, selector: str | None = None):
        self.category_id = category_id
        super().__init__(
            selector if selector is not None else f"{category_id}/*",
            f"no category '{category_id}' in registry",
        )


class SelectorErrors(AgentCliError):
    """Several selector errors reported at once."""

    def __init__(self, errors: list[UnknownSelector]):
        self.errors = errors
        lines = [f"{len(errors)} selectors could not be resolved:"]
        lines.extend(f"  - {error}" for error in errors)
        super().__init__("\n".join(lines))


class UnknownPreset(AgentCliError):
    """Raised when a preset name is not defined in the registry."""

    def __init__(self, preset_name: str, available: list[str]):
        self.preset_name = preset_name
        hint = ", ".join(available) if available else "none defined"
        super().__init__(f"Unknown preset '{preset_name}' (available: {hint})")


class SourceFolderMissing(AgentCliError):
    """Raised when a registry entry points at content absent from the snapshot."""

    def __init__(self, selector: str, path: Path, detail: str = "folder not found"):
        self.selector = selector
        self.path = path
        super().__init__(f"Source for '{selector}' is missing ({detail}): {path}")


class AmbiguousFolder(AgentCliError):
    """Raised when two entries would install to the same folder or file."""

    def __init__(self, folder_name: str, selectors: list[str]):
        self.folder_name = folder_name
        self.selectors = selectors
        super().__init__(
            f"'{folder_name}' is provided by more than one entry: "
            + ", ".join(selectors)
        )


class SourceUnavailable(AgentCliError):
    """Raised when the source repository cannot be fetched."""

    def __init__(self, source: str, detail: str):
        self.source = source
        super().__init__(f"Source '{source}' is unavailable: {detail}")


class RefNotFound(AgentCliError):
    """Raised when the requested ref does not exist in the source repository."""

    def __init__(self, source: str, ref: str):
        self.source = source
        self.ref = ref
        super().__init__(f"Ref '{ref}' not found in '{source}'")


class GitignoreConflict(AgentCliError):
    """Raised in strict mode when generated paths are not ignored by git."""

    def __init__(self, gitignore_path: Path, missing: list[str]):
        self.gitignore_path = gitignore_path
        self.missing = missing
        super().__init__(
            f"Generated paths missing from {gitignore_path}: " + ", ".join(missing)
        )


class UnsupportedShell(AgentCliError):
    """Raised for completion requests on a shell we do not support."""

    def __init__(self, shell: str):
        self.shell = shell
        super().__init__(f'Unsupported shell: "{shell}". Use zsh, bash, or fish.')


class PromptNotFound(AgentCliError):
    """Raised when a prompt reference does not resolve."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Prompt '{reference}' not found")
