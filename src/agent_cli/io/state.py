"""Install state I/O for .agent-state.json."""

from pathlib import Path

from pydantic import ValidationError

from agent_cli.io.atomic import write_json_atomic
from agent_cli.models.manifest import InstallState
from agent_cli.output import styled_warning, user_output

STATE_FILE = ".agent-state.json"


def load_install_state(project_dir: Path) -> InstallState | None:
    """Load .agent-state.json from the project directory.

    Returns None if the file doesn't exist. A corrupted state file is
    reported and treated as absent: ownership then falls back to the
    registry-folder rule, which never touches user files.
    """
    state_path = project_dir / STATE_FILE
    if not state_path.exists():
        return None

    try:
        return InstallState.model_validate_json(state_path.read_text(encoding="utf-8"))
    except ValidationError as e:
        user_output(styled_warning(f"Ignoring unreadable {STATE_FILE}: {e.error_count()} error(s)"))
        return None


def save_install_state(project_dir: Path, state: InstallState) -> Path:
    """Save install state and return its path."""
    state_path = project_dir / STATE_FILE
    data = state.model_dump(by_alias=True)
    data["files"] = sorted(set(state.files))
    write_json_atomic(state_path, data)
    return state_path
