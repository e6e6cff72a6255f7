"""Option resolver: raw flags or prompt answers -> one ScaffoldPlan."""

from __future__ import annotations

import re
from collections.abc import Sequence
from itertools import count
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, TypeAdapter, ValidationError
from result import Err, Ok, Result, is_err

from buildinette.common import GitUrl, ProjectName, Toolchain, create_logger, resolve_working_directory
from buildinette.config import BuildinetteConfig, DefaultAlreadySetError, DefaultsWriter
from buildinette.utils.validation import format_validation_error

from .models import (
    BuildConfig,
    DependencyKind,
    DependencySpec,
    FetchFailurePolicy,
    Language,
    LinkMode,
    OptionsError,
    ProjectSpec,
    RemoteSpec,
    ScaffoldPlan,
)

logger = create_logger("scaffold.options")

_NAMED_REMOTE = re.compile(r"^(?P<name>[A-Za-z0-9_][A-Za-z0-9_.-]*)=(?P<url>.+)$")
_DEFAULT_REMOTE = "origin"

_BASE_FLAGS: dict[Language, tuple[str, ...]] = {
    Language.C: ("-g3",),
    Language.CPP: ("-Wall", "-Wextra", "-Werror", "-std=c++98"),
}
_LIBRARY_LINK_FLAGS = ("-Llibft", "-lft")
_GRAPHICS_LINK_FLAGS_DARWIN = ("-Lmlx", "-lmlx", "-framework", "OpenGL", "-framework", "AppKit")
_GRAPHICS_LINK_FLAGS_X11 = ("-Lmlx", "-lmlx", "-lX11", "-lXext", "-lbsd")

_project_name_adapter = TypeAdapter(ProjectName)
_git_url_adapter = TypeAdapter(GitUrl)


class ScaffoldOptions(BaseModel):
    """Options as given on the command line, before any validation."""

    names: list[str] = []
    libft: bool = False
    libft_url: str | None = None
    libft_force: str | None = None
    # Use this libft URL for the current run only (interactive answer)
    libft_once: str | None = None
    mlx: bool = False
    link: LinkMode = LinkMode.ABSOLUTE
    remotes: list[str] = []
    git_init: bool = False
    compiler: str | None = None
    language: Language = Language.C
    subprojects: bool = False
    interactive: bool = False
    working_dir: Path | None = None


class Prompter(Protocol):
    """Terminal prompts used by interactive mode."""

    def ask(self, text: str, default: str | None = None) -> str: ...

    def confirm(self, text: str, default: bool = False) -> bool: ...


def resolve_plan(
    options: ScaffoldOptions,
    config: BuildinetteConfig,
    toolchain: Toolchain,
    defaults: DefaultsWriter,
) -> Result[ScaffoldPlan, OptionsError]:
    """Validate options and build the plan.

    The libft default is persisted last so that a rejected invocation never
    touches the configuration file.
    """
    layout_result = _resolve_layout(options)
    if is_err(layout_result):
        return layout_result
    repository_root, projects = layout_result.unwrap()

    remotes_result = parse_remotes(options.remotes)
    if is_err(remotes_result):
        return remotes_result

    library_result = _resolve_library_url(options, config, defaults)
    if is_err(library_result):
        return library_result

    dependencies: list[DependencySpec] = []
    if (library_url := library_result.unwrap()) is not None:
        dependencies.append(DependencySpec(kind=DependencyKind.LIBRARY, source_url=library_url))
    if options.mlx:
        dependencies.append(DependencySpec(kind=DependencyKind.GRAPHICS, source_url=config.graphics_url))

    compiler = options.compiler or _default_compiler(options.language, toolchain)
    build = build_config_for(projects[0], dependencies, compiler=compiler, toolchain=toolchain)

    plan = ScaffoldPlan(
        projects=tuple(projects),
        build=build,
        dependencies=tuple(dependencies),
        remotes=tuple(remotes_result.unwrap()),
        repository_root=repository_root,
        init_repository=options.git_init,
        fetch_policy=FetchFailurePolicy.SKIP if options.interactive else FetchFailurePolicy.ABORT,
    )
    logger.debug(
        "Options resolved",
        projects=[project.name for project in plan.projects],
        dependencies=[dependency.kind.value for dependency in plan.dependencies],
        remotes=[remote.name for remote in plan.remotes],
    )
    return Ok(plan)


def build_config_for(
    project: ProjectSpec,
    dependencies: Sequence[DependencySpec],
    *,
    compiler: str,
    toolchain: Toolchain,
) -> BuildConfig:
    kinds = {dependency.kind for dependency in dependencies}

    compiler_flags = list(_BASE_FLAGS[project.language])
    if project.link_mode == LinkMode.RELATIVE:
        compiler_flags.append(f"-I{project.include_dir}")
        if DependencyKind.GRAPHICS in kinds:
            compiler_flags.append("-Imlx")

    linker_flags: list[str] = []
    if DependencyKind.LIBRARY in kinds:
        linker_flags.extend(_LIBRARY_LINK_FLAGS)
    if DependencyKind.GRAPHICS in kinds:
        linker_flags.extend(_GRAPHICS_LINK_FLAGS_DARWIN if toolchain.is_darwin else _GRAPHICS_LINK_FLAGS_X11)

    return BuildConfig(compiler=compiler, compiler_flags=tuple(compiler_flags), linker_flags=tuple(linker_flags))


def parse_remotes(values: Sequence[str]) -> Result[list[RemoteSpec], OptionsError]:
    """Parse ``[NAME=]URL`` values; unnamed ones become origin, origin2, ..."""
    named: list[tuple[str | None, str]] = []
    for value in values:
        value = value.strip()
        if not value:
            return Err(OptionsError(message="empty git remote", hint='use --git="<url>" or --git="<name>=<url>"'))
        if match := _NAMED_REMOTE.match(value):
            named.append((match["name"], match["url"]))
        else:
            named.append((None, value))

    taken = [name for name, _ in named if name is not None]
    duplicates = sorted({name for name in taken if taken.count(name) > 1})
    if duplicates:
        return Err(OptionsError(message=f"duplicate git remote name: {', '.join(duplicates)}"))

    used = set(taken)
    candidates = (_DEFAULT_REMOTE if index == 1 else f"{_DEFAULT_REMOTE}{index}" for index in count(1))
    remotes: list[RemoteSpec] = []
    for name, url in named:
        if name is None:
            name = next(candidate for candidate in candidates if candidate not in used)
        remotes.append(RemoteSpec(name=name, url=url))
    return Ok(remotes)


def collect_interactive_options(
    prompter: Prompter,
    config: BuildinetteConfig,
    toolchain: Toolchain,
    base: ScaffoldOptions | None = None,
) -> ScaffoldOptions:
    """Ask for every option in a fixed order, using base values as defaults."""
    base = base or ScaffoldOptions()

    name = prompter.ask("Project name", default=base.names[0] if base.names else None).strip()
    language = Language(
        _ask_choice(prompter, "Language", [item.value for item in Language], base.language.value)
    )

    default_subprojects = ", ".join(base.names[1:]) if base.subprojects else ""
    subprojects = [
        item.strip()
        for item in prompter.ask("Subprojects (comma separated, empty for none)", default=default_subprojects).split(",")
        if item.strip()
    ]

    link = LinkMode(_ask_choice(prompter, "Link mode", [item.value for item in LinkMode], base.link.value))
    compiler = prompter.ask("Compiler", default=base.compiler or _default_compiler(language, toolchain)).strip()

    libft_fields = _ask_library(prompter, config, base)
    mlx = prompter.confirm("Vendor the MinilibX graphics library?", default=base.mlx)

    remotes: list[str] = []
    while answer := prompter.ask("Git remote ([NAME=]URL, empty to finish)", default="").strip():
        remotes.append(answer)
    git_init = bool(remotes) or prompter.confirm("Initialize a git repository?", default=base.git_init)

    return ScaffoldOptions(
        names=[name, *subprojects],
        mlx=mlx,
        link=link,
        remotes=remotes,
        git_init=git_init,
        compiler=compiler or None,
        language=language,
        subprojects=bool(subprojects),
        interactive=True,
        working_dir=base.working_dir,
        **libft_fields,
    )


def _ask_library(prompter: Prompter, config: BuildinetteConfig, base: ScaffoldOptions) -> dict[str, object]:
    remembered = config.libft_default
    # URL given on the command line, if any
    given = base.libft_force or base.libft_url or base.libft_once or (remembered if base.libft else None)

    if not prompter.confirm("Vendor libft?", default=given is not None or remembered is not None):
        return {}

    url = prompter.ask("libft repository URL", default=given or remembered).strip()
    if remembered is None:
        return {"libft_url": url}
    if url == remembered:
        return {"libft": True}
    if url == base.libft_force:
        return {"libft_force": url}
    if prompter.confirm("Remember it as the new libft default?", default=False):
        return {"libft_force": url}
    return {"libft_once": url}


def _ask_choice(prompter: Prompter, text: str, choices: list[str], default: str) -> str:
    label = f"{text} ({'/'.join(choices)})"
    while True:
        answer = prompter.ask(label, default=default).strip().lower()
        if answer in choices:
            return answer


def _default_compiler(language: Language, toolchain: Toolchain) -> str:
    return toolchain.cpp_compiler if language == Language.CPP else toolchain.c_compiler


def _resolve_layout(options: ScaffoldOptions) -> Result[tuple[Path, list[ProjectSpec]], OptionsError]:
    names = [name.strip() for name in options.names]
    if not names or not all(names):
        return Err(OptionsError(message="project name is required", hint='use --name="<project_name>"'))

    for name in names:
        try:
            _project_name_adapter.validate_python(name)
        except ValidationError as exc:
            return Err(OptionsError(message=format_validation_error(f"project name '{name}'", exc)))

    if len(set(names)) != len(names):
        return Err(OptionsError(message="project names must be unique"))

    base_dir = resolve_working_directory(options.working_dir)

    if options.subprojects:
        if len(names) < 2:
            return Err(
                OptionsError(
                    message="subproject mode needs a repository name and at least one subproject",
                    hint='use --sub --name="<repository>" --name="<subproject>"',
                )
            )
        repository_root = base_dir / names[0]
        directories = [(name, repository_root / name) for name in names[1:]]
    else:
        if len(names) > 1:
            return Err(
                OptionsError(
                    message="several project names given without subproject mode",
                    hint="use --sub to create subprojects in one repository",
                )
            )
        repository_root = base_dir / names[0]
        directories = [(names[0], repository_root)]

    projects = [
        ProjectSpec(name=name, target_directory=directory, language=options.language, link_mode=options.link)
        for name, directory in directories
    ]
    return Ok((repository_root, projects))


def _resolve_library_url(
    options: ScaffoldOptions,
    config: BuildinetteConfig,
    defaults: DefaultsWriter,
) -> Result[str | None, OptionsError]:
    given = [
        flag
        for flag, value in (
            ("--libft", options.libft),
            ("--libft-url", options.libft_url),
            ("--libft-force", options.libft_force),
            ("libft URL", options.libft_once),
        )
        if value
    ]
    if len(given) > 1:
        return Err(OptionsError(message=f"conflicting libft options: {', '.join(given)}"))
    if not given:
        return Ok(None)

    if options.libft:
        if config.libft_default is None:
            return Err(
                OptionsError(
                    message="--libft requires a remembered libft repository URL",
                    hint='provide the repository URL with --libft-url="<git@libft_repo>" to configure it',
                )
            )
        return Ok(config.libft_default)

    url = options.libft_force or options.libft_url or options.libft_once
    assert url is not None
    try:
        _git_url_adapter.validate_python(url)
    except ValidationError as exc:
        return Err(OptionsError(message=format_validation_error("libft repository URL", exc)))

    if options.libft_once:
        return Ok(url)

    return (
        defaults.remember_library_url(url, force=options.libft_force is not None)
        .map(lambda _: url)
        .map_err(_library_default_error)
    )


def _library_default_error(error: object) -> OptionsError:
    if isinstance(error, DefaultAlreadySetError):
        return OptionsError(
            message=error.message,
            hint='use --libft-force="<git@libft_repo>" to override the configuration',
        )
    return OptionsError(message=f"cannot remember libft default: {getattr(error, 'message', error)}")
