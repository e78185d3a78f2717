"""Shared test fixtures."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from agent_cli.config import GlobalConfig
from agent_cli.context import AgentContext
from agent_cli.integrations.fake_clipboard import FakeClipboard
from agent_cli.integrations.fake_source import FakeSourceProvider
from agent_cli.io.manifest import save_manifest
from agent_cli.models.manifest import Manifest
from tests.test_utils.constants import OUTPUT_DIR, REF, SOURCE
from tests.test_utils.snapshot_builder import build_standard_snapshot


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a temporary project directory."""
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    return project_dir


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_agent_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point AGENT_CLI_HOME at a temporary directory for every test."""
    home = tmp_path / "agent-home"
    monkeypatch.setenv("AGENT_CLI_HOME", str(home))
    monkeypatch.delenv("AGENT_CLI_DEBUG", raising=False)
    return home


@pytest.fixture
def snapshot_root(tmp_path: Path) -> Path:
    """Standard source snapshot (see build_standard_snapshot)."""
    return build_standard_snapshot(tmp_path / "source")


@pytest.fixture
def source_provider(snapshot_root: Path) -> FakeSourceProvider:
    return FakeSourceProvider(
        roots={SOURCE: snapshot_root},
        refs={SOURCE: [REF, "v1.1.0"]},
        latest={SOURCE: "v1.1.0"},
    )


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def agent_ctx(
    tmp_project: Path,
    tmp_path: Path,
    source_provider: FakeSourceProvider,
    clipboard: FakeClipboard,
) -> AgentContext:
    """Test context wired to the standard snapshot and the temporary project."""
    return AgentContext.for_test(
        source_provider=source_provider,
        clipboard=clipboard,
        global_config=GlobalConfig(cache_dir=tmp_path / "cache"),
        cwd=tmp_project,
    )


@pytest.fixture
def write_manifest(tmp_project: Path):
    """Factory writing a .agent.json for the standard source into the project."""

    def _write(include: list[str], **overrides: str) -> Manifest:
        fields: dict[str, object] = {
            "source": SOURCE,
            "ref": REF,
            "output_dir": OUTPUT_DIR,
            "include": include,
        }
        fields.update(overrides)
        manifest = Manifest.model_validate(fields)
        save_manifest(tmp_project, manifest)
        return manifest

    return _write
