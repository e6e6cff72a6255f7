"""Turns pydantic validation errors into one-line CLI messages."""

from __future__ import annotations

from pydantic import ValidationError

__all__ = ["format_validation_error"]


def format_validation_error(kind: str, error: ValidationError) -> str:
    """``invalid <kind>: [<field>: ]<first message>[ (+N more)]``."""
    details = error.errors()
    if not details:
        return f"invalid {kind}: {error}"

    first = details[0]
    message = first["msg"].removeprefix("Value error, ")
    location = ".".join(str(part) for part in first.get("loc", ()))
    if location:
        message = f"{location}: {message}"
    if len(details) > 1:
        message = f"{message} (+{len(details) - 1} more)"
    return f"invalid {kind}: {message}"
