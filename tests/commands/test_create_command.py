"""Tests for the create command."""

from pathlib import Path

from click.testing import CliRunner

from agent_cli.cli import cli
from agent_cli.context import AgentContext


def test_create_skill_in_current_directory(
    cli_runner: CliRunner, agent_ctx: AgentContext, tmp_project: Path
) -> None:
    result = cli_runner.invoke(cli, ["create", "skill", "deploy"], obj=agent_ctx)

    assert result.exit_code == 0, result.output
    document = tmp_project / "deploy" / "skill.md"
    assert document.read_text(encoding="utf-8").startswith("---\nname: deploy\n")
    assert f"Created {document}" in result.output


def test_create_agent_in_given_directory(
    cli_runner: CliRunner, agent_ctx: AgentContext, tmp_project: Path
) -> None:
    result = cli_runner.invoke(
        cli, ["create", "agent", "reviewer", "--dir", "agents"], obj=agent_ctx
    )

    assert result.exit_code == 0, result.output
    assert (tmp_project / "agents" / "reviewer" / "agent.md").exists()


def test_create_refuses_existing_folder(
    cli_runner: CliRunner, agent_ctx: AgentContext, tmp_project: Path
) -> None:
    (tmp_project / "deploy").mkdir()

    result = cli_runner.invoke(cli, ["create", "skill", "deploy"], obj=agent_ctx)

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_create_rejects_invalid_name(cli_runner: CliRunner, agent_ctx: AgentContext) -> None:
    result = cli_runner.invoke(cli, ["create", "skill", "My Skill"], obj=agent_ctx)

    assert result.exit_code == 1
    assert "Invalid name" in result.output


def test_create_rejects_unknown_kind(cli_runner: CliRunner, agent_ctx: AgentContext) -> None:
    result = cli_runner.invoke(cli, ["create", "prompt", "x"], obj=agent_ctx)

    assert result.exit_code == 2
