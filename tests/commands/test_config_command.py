"""Tests for the config command group."""

from pathlib import Path

from click.testing import CliRunner

from agent_cli.cli import cli
from agent_cli.config import load_global_config
from agent_cli.context import AgentContext


def test_config_show(cli_runner: CliRunner, agent_ctx: AgentContext, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["config", "show"], obj=agent_ctx)

    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == [
        f"cache_dir = {tmp_path / 'cache'}",
        "default_source = ",
        "default_output_dir = .agent/skills",
        "gitignore = auto",
    ]


def test_config_set_writes_global_file(
    cli_runner: CliRunner, agent_ctx: AgentContext, isolated_agent_home: Path
) -> None:
    result = cli_runner.invoke(
        cli, ["config", "set", "default_source", "github:acme/agents"], obj=agent_ctx
    )

    assert result.exit_code == 0, result.output
    assert (isolated_agent_home / "config.toml").exists()
    assert load_global_config().default_source == "github:acme/agents"


def test_config_set_rejects_invalid_value(
    cli_runner: CliRunner, agent_ctx: AgentContext, isolated_agent_home: Path
) -> None:
    result = cli_runner.invoke(cli, ["config", "set", "gitignore", "maybe"], obj=agent_ctx)

    assert result.exit_code == 1
    assert "Invalid gitignore mode: maybe" in result.output
    assert not (isolated_agent_home / "config.toml").exists()


def test_config_path(
    cli_runner: CliRunner, agent_ctx: AgentContext, isolated_agent_home: Path
) -> None:
    result = cli_runner.invoke(cli, ["config", "path"], obj=agent_ctx)

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == str(isolated_agent_home / "config.toml")
