"""Tests for relative path checks."""

import pytest

from agent_cli.paths import is_safe_relative, validate_relative_path


@pytest.mark.parametrize("path", ["out", ".agent/skills", "a/b/c.md", "."])
def test_relative_paths_are_safe(path: str) -> None:
    assert is_safe_relative(path)


@pytest.mark.parametrize("path", ["", "/abs", "..", "../x", "a/../../b"])
def test_escaping_paths_are_unsafe(path: str) -> None:
    assert not is_safe_relative(path)


def test_validate_names_the_field() -> None:
    with pytest.raises(ValueError, match="outputDir must be a relative path"):
        validate_relative_path("../x", "outputDir")
