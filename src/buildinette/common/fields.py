"""Reusable Pydantic field annotations."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, Field, StrictStr

type JsonDict = dict[str, object]

NonEmptyString = Annotated[StrictStr, Field(min_length=1, frozen=True)]


def _reject_dot_names(value: str) -> str:
    if value in {".", ".."}:
        raise ValueError("project name cannot be '.' or '..'")
    return value


# Filesystem-safe project name, also used for the binary and file names
ProjectName = Annotated[
    StrictStr,
    Field(
        pattern=r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$",
        max_length=255,
        frozen=True,
        description="Project name (letters, digits, '_', '.', '-')",
    ),
    AfterValidator(_reject_dot_names),
]

# Git URL: https, ssh, git protocol, scp-style user@host:path or local path
GitUrl = Annotated[
    StrictStr,
    Field(
        pattern=r"^(https?://|ssh://|git://|file://|[\w.-]+@[\w.-]+:|/|\./|\.\./|~)",
        frozen=True,
        description="Git repository URL",
    ),
]

# Name of a git remote (e.g., "origin")
RemoteName = Annotated[
    StrictStr,
    Field(
        pattern=r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$",
        frozen=True,
        description="Git remote name",
    ),
]

__all__ = [
    "GitUrl",
    "JsonDict",
    "NonEmptyString",
    "ProjectName",
    "RemoteName",
]
