"""Helpers for turning pydantic validation failures into one-line messages."""

from pydantic import ValidationError


def describe_validation_error(error: ValidationError) -> str:
    """Describe the first validation problem as "location: message"."""
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if location:
        return f"{location}: {first['msg']}"
    return str(first["msg"])
