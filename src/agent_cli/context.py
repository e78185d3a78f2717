"""Application context with dependency injection.

The AgentContext dataclass holds all dependencies (source provider,
clipboard, global config) and is created once at CLI entry point, then
threaded through the commands via Click's context object.
"""

from dataclasses import dataclass
from pathlib import Path

from agent_cli.config import GlobalConfig, load_global_config
from agent_cli.integrations.clipboard import Clipboard, SystemClipboard
from agent_cli.integrations.git_source import GitSourceProvider
from agent_cli.integrations.source import SourceProvider


@dataclass(frozen=True)
class AgentContext:
    """Immutable context holding all dependencies for agent-cli commands.

    Attributes:
        source_provider: Fetches source repositories into local snapshots
        clipboard: Sink for `agent prompt copy`
        global_config: Settings from ~/.agent-cli/config.toml
        cwd: Project directory the command operates on
        debug: Debug flag (full stack traces in error handling)
    """

    source_provider: SourceProvider
    clipboard: Clipboard
    global_config: GlobalConfig
    cwd: Path
    debug: bool

    @staticmethod
    def for_test(
        source_provider: SourceProvider | None = None,
        clipboard: Clipboard | None = None,
        global_config: GlobalConfig | None = None,
        cwd: Path | None = None,
        debug: bool = False,
    ) -> "AgentContext":
        """Create test context with fakes for any unspecified dependency.

        Args:
            source_provider: Optional SourceProvider. If None, an empty FakeSourceProvider.
            clipboard: Optional Clipboard. If None, creates FakeClipboard.
            global_config: Optional GlobalConfig. If None, defaults with a fake cache dir.
            cwd: Project directory (defaults to Path("/fake/project"))
            debug: Whether to enable debug mode (default False)

        Returns:
            AgentContext configured with provided values and test defaults
        """
        from agent_cli.integrations.fake_clipboard import FakeClipboard
        from agent_cli.integrations.fake_source import FakeSourceProvider

        resolved_provider: SourceProvider = (
            source_provider if source_provider is not None else FakeSourceProvider()
        )
        resolved_clipboard: Clipboard = clipboard if clipboard is not None else FakeClipboard()
        resolved_config: GlobalConfig = (
            global_config
            if global_config is not None
            else GlobalConfig(cache_dir=Path("/fake/cache"))
        )
        resolved_cwd: Path = cwd if cwd is not None else Path("/fake/project")

        return AgentContext(
            source_provider=resolved_provider,
            clipboard=resolved_clipboard,
            global_config=resolved_config,
            cwd=resolved_cwd,
            debug=debug,
        )


def create_context(*, debug: bool) -> AgentContext:
    """Create production context with real implementations.

    Called once at CLI entry point.

    Raises:
        ValueError: If the global config file is invalid
    """
    global_config = load_global_config()
    return AgentContext(
        source_provider=GitSourceProvider(global_config.cache_dir),
        clipboard=SystemClipboard(),
        global_config=global_config,
        cwd=Path.cwd(),
        debug=debug,
    )
