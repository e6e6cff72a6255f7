"""Data and error models for project scaffolding."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from buildinette.common import GitUrl, NonEmptyString, ProjectName, RemoteName


class Language(str, Enum):
    """Language of the generated skeleton."""

    C = "c"
    CPP = "cpp"


class LinkMode(str, Enum):
    """How generated sources include the project header.

    absolute: ``#include "../includes/name.h"``, no ``-I`` flag.
    relative: ``#include "name.h"`` resolved through ``-Iincludes``.
    """

    ABSOLUTE = "absolute"
    RELATIVE = "relative"


class DependencyKind(str, Enum):
    LIBRARY = "library"
    GRAPHICS = "graphics"


class FetchFailurePolicy(str, Enum):
    """What to do when a dependency cannot be cloned."""

    ABORT = "abort"
    SKIP = "skip"


_LAYOUT: dict[Language, tuple[str, str, str, str]] = {
    # source ext, header ext, source dir, include dir
    Language.C: ("c", "h", "srcs", "includes"),
    Language.CPP: ("cpp", "hpp", "src", "include"),
}

DEPENDENCY_PATHS: dict[DependencyKind, Path] = {
    DependencyKind.LIBRARY: Path("libft"),
    DependencyKind.GRAPHICS: Path("mlx"),
}


class ProjectSpec(BaseModel):
    """One generated skeleton."""

    model_config = ConfigDict(frozen=True)

    name: ProjectName
    target_directory: Path
    language: Language = Language.C
    link_mode: LinkMode = LinkMode.ABSOLUTE

    @property
    def source_extension(self) -> str:
        return _LAYOUT[self.language][0]

    @property
    def header_extension(self) -> str:
        return _LAYOUT[self.language][1]

    @property
    def source_dir(self) -> str:
        return _LAYOUT[self.language][2]

    @property
    def include_dir(self) -> str:
        return _LAYOUT[self.language][3]

    @property
    def source_filename(self) -> str:
        return f"{self.name}.{self.source_extension}"

    @property
    def header_filename(self) -> str:
        return f"{self.name}.{self.header_extension}"

    @property
    def header_guard(self) -> str:
        """Uppercased name plus ``_H`` or ``_HPP``; non-word characters become ``_``.

        The name is kept as is otherwise, so a name starting with a digit
        (``42sh``) yields ``42SH_H``, which a C preprocessor rejects as a macro
        name. Rename such projects or fix the guard by hand.
        """
        stem = re.sub(r"\W", "_", self.name).upper()
        return f"{stem}_{self.header_extension.upper()}"


class BuildConfig(BaseModel):
    """Compiler and flags written into the Makefile."""

    model_config = ConfigDict(frozen=True)

    compiler: NonEmptyString
    compiler_flags: tuple[str, ...] = ()
    linker_flags: tuple[str, ...] = ()


class DependencySpec(BaseModel):
    """A repository vendored into every generated project."""

    model_config = ConfigDict(frozen=True)

    kind: DependencyKind
    source_url: GitUrl | None = None

    @property
    def local_path(self) -> Path:
        return DEPENDENCY_PATHS[self.kind]


class RemoteSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: RemoteName
    url: NonEmptyString


class ScaffoldPlan(BaseModel):
    """Everything a run needs, resolved once from flags or prompts."""

    model_config = ConfigDict(frozen=True)

    projects: tuple[ProjectSpec, ...] = Field(min_length=1)
    build: BuildConfig
    dependencies: tuple[DependencySpec, ...] = ()
    remotes: tuple[RemoteSpec, ...] = ()
    repository_root: Path
    init_repository: bool = False
    fetch_policy: FetchFailurePolicy = FetchFailurePolicy.ABORT

    @property
    def wants_repository(self) -> bool:
        return self.init_repository or bool(self.remotes)


class ScaffoldReport(BaseModel):
    """Outcome of a scaffolding run, used for the CLI summary."""

    projects: list[Path] = []
    vendored: list[Path] = []
    skipped: list[DependencySpec] = []
    repository: Path | None = None
    remotes: list[RemoteSpec] = []
    warnings: list[str] = []


class ScaffoldError(BaseModel):
    """Base scaffolding error."""

    model_config = ConfigDict(extra="forbid")

    message: str


class OptionsError(ScaffoldError):
    """Invalid or inconsistent options."""

    hint: str | None = None


class GenerateError(ScaffoldError):
    """Failed to write a skeleton."""

    path: Path


class FetchError(ScaffoldError):
    """Failed to vendor a dependency."""

    kind: DependencyKind
    url: str


class RepositoryError(ScaffoldError):
    """Failed to initialize the repository or register a remote."""

    path: Path
