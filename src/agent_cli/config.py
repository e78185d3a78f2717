"""Global configuration loaded from ~/.agent-cli/config.toml.

The home directory can be moved with the AGENT_CLI_HOME environment
variable. A missing file means every setting takes its default.

Keys:
- cache_dir: where source repositories are cloned (default <home>/cache)
- default_source: source used by `agent init` when none is given
- default_output_dir: output directory written into new manifests
- gitignore: guard mode for generated paths ("auto", "strict" or "off")
"""

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

import tomlkit

from agent_cli.io.gitignore import GitignoreMode, validate_gitignore_mode
from agent_cli.paths import validate_relative_path

HOME_ENV_VAR = "AGENT_CLI_HOME"
CONFIG_FILE = "config.toml"
DEFAULT_OUTPUT_DIR = ".agent/skills"

CONFIG_KEYS = ("cache_dir", "default_source", "default_output_dir", "gitignore")


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration.

    Loaded once at CLI entry point and stored in AgentContext.
    """

    cache_dir: Path
    default_source: str | None = None
    default_output_dir: str = DEFAULT_OUTPUT_DIR
    gitignore: GitignoreMode = "auto"

    def with_value(self, key: str, value: str) -> "GlobalConfig":
        """Return a copy with one key set from its string form.

        Raises:
            ValueError: If the key is unknown or the value invalid for it
        """
        if key == "cache_dir":
            return replace(self, cache_dir=Path(value).expanduser())
        if key == "default_source":
            return replace(self, default_source=value or None)
        if key == "default_output_dir":
            validate_relative_path(value, "default_output_dir")
            return replace(self, default_output_dir=value)
        if key == "gitignore":
            return replace(self, gitignore=validate_gitignore_mode(value))
        raise ValueError(f"Unknown config key: {key} (expected one of {', '.join(CONFIG_KEYS)})")


def agent_home() -> Path:
    """Directory holding the global config and the default cache."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".agent-cli"


def config_path() -> Path:
    """Path of the global config file."""
    return agent_home() / CONFIG_FILE


def default_config() -> GlobalConfig:
    """Configuration used when no config file exists."""
    return GlobalConfig(cache_dir=agent_home() / "cache")


def load_global_config(path: Path | None = None) -> GlobalConfig:
    """Load the global config, falling back to defaults for absent keys.

    Args:
        path: Config file to read (defaults to config_path())

    Raises:
        ValueError: If the file is not valid TOML or a value is invalid
    """
    config_file = path if path is not None else config_path()
    defaults = default_config()
    if not config_file.exists():
        return defaults

    try:
        data = tomllib.loads(config_file.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {config_file}: {e}") from e

    config = defaults
    for key in CONFIG_KEYS:
        if key in data:
            config = config.with_value(key, str(data[key]))
    return config


def save_global_config(config: GlobalConfig, path: Path | None = None) -> Path:
    """Save the global config, preserving comments and unknown keys already in the file.

    Returns:
        Path of the written file
    """
    config_file = path if path is not None else config_path()
    config_file.parent.mkdir(parents=True, exist_ok=True)

    if config_file.exists():
        doc = tomlkit.parse(config_file.read_text(encoding="utf-8"))
    else:
        doc = tomlkit.document()
        doc.add(tomlkit.comment("Global agent-cli configuration"))

    doc["cache_dir"] = str(config.cache_dir)
    if config.default_source is not None:
        doc["default_source"] = config.default_source
    elif "default_source" in doc:
        del doc["default_source"]
    doc["default_output_dir"] = config.default_output_dir
    doc["gitignore"] = config.gitignore

    config_file.write_text(tomlkit.dumps(doc), encoding="utf-8")
    return config_file
