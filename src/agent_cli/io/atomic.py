"""Atomic file writes."""

import json
from pathlib import Path


def write_bytes_atomic(path: Path, content: bytes) -> None:
    """Write content to path through a temporary sibling and a rename.

    Creates parent directories if they don't exist. A crash mid-write leaves
    either the old file or the new one, never a truncated file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(f".{path.name}.tmp")
    with temp_path.open("wb") as f:
        f.write(content)
    temp_path.replace(path)


def write_json_atomic(path: Path, data: object) -> None:
    """Write data as 2-space indented UTF-8 JSON with a trailing newline."""
    text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    write_bytes_atomic(path, text.encode("utf-8"))
