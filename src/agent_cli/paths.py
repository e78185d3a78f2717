"""Checks for relative paths read from registries, manifests and install state."""

from pathlib import PurePosixPath


def is_safe_relative(path: str) -> bool:
    """Whether a path stays inside the directory it is joined to.

    Empty, absolute and ``..``-containing paths are rejected.
    """
    pure = PurePosixPath(path)
    return bool(path) and not pure.is_absolute() and ".." not in pure.parts


def validate_relative_path(value: str, what: str) -> str:
    """Return `value` if it is a safe relative path.

    Raises:
        ValueError: If the path is empty, absolute or climbs out with ".."
    """
    if not is_safe_relative(value):
        msg = f"{what} must be a relative path inside its root: {value!r}"
        raise ValueError(msg)
    return value
