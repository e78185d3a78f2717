"""Tests for the list command."""

from click.testing import CliRunner

from agent_cli.cli import cli
from agent_cli.context import AgentContext
from tests.test_utils.constants import REF, SOURCE


def test_list_prints_resolved_entries(
    cli_runner: CliRunner, agent_ctx: AgentContext, write_manifest
) -> None:
    write_manifest(["development/*", "agents/planner"])

    result = cli_runner.invoke(cli, ["list"], obj=agent_ctx)

    assert result.exit_code == 0, result.output
    assert [line.split() for line in result.stdout.splitlines()] == [
        ["development/nextjs", "skill"],
        ["development/testing", "skill"],
        ["agents/planner", "agent"],
    ]
    assert "3 entries selected" in result.output


def test_list_empty_manifest(
    cli_runner: CliRunner, agent_ctx: AgentContext, write_manifest
) -> None:
    write_manifest([])

    result = cli_runner.invoke(cli, ["list"], obj=agent_ctx)

    assert result.exit_code == 0, result.output
    assert result.stdout == ""
    assert "No entries selected" in result.output


def test_list_warns_about_unknown_selectors(
    cli_runner: CliRunner, agent_ctx: AgentContext, write_manifest
) -> None:
    write_manifest(["mobile/*", "agents/planner"])

    result = cli_runner.invoke(cli, ["list"], obj=agent_ctx)

    assert result.exit_code == 0, result.output
    assert "no category 'mobile' in registry" in result.output
    assert "1 entry selected" in result.output


def test_list_remote_marks_included_entries(
    cli_runner: CliRunner, agent_ctx: AgentContext, write_manifest
) -> None:
    write_manifest(["development/testing"])

    result = cli_runner.invoke(cli, ["list", "--remote"], obj=agent_ctx)

    assert result.exit_code == 0, result.output
    rows = {line.split()[1]: line for line in result.stdout.splitlines() if "/" in line}
    assert "included" in rows["development/testing"]
    assert "available" in rows["development/nextjs"]
    assert "nextjs-app" in rows["development/nextjs"]
    assert f"Registry v1.0.0 at {SOURCE}@{REF}" in result.output
