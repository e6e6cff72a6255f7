"""CLI command that generates a project skeleton."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from result import Err, Ok

from buildinette.cli.prompts import TyperPrompter
from buildinette.config import (
    BuildinetteConfig,
    ConfigError,
    ConfigIOError,
    ConfigStore,
    ConfigValidationError,
    ConfigYamlError,
    DefaultAlreadySetError,
    FileConfigStore,
)
from buildinette.scaffold import (
    FetchError,
    GenerateError,
    Language,
    LinkMode,
    OptionsError,
    RepositoryError,
    ScaffoldError,
    ScaffoldOptions,
    ScaffoldPlan,
    ScaffoldReport,
    Scaffolder,
    collect_interactive_options,
    resolve_plan,
)
from buildinette.scaffold.models import DependencyKind
from buildinette.settings import settings

WorkingDirOption = Annotated[
    Path | None,
    typer.Option(
        "--working-dir",
        hidden=True,
        help="Directory in which the project is created (defaults to the current directory).",
    ),
]


@dataclass
class CliState:
    """Configuration loaded by the command, cached on the Click context."""

    store: ConfigStore
    config: BuildinetteConfig


def create(
    ctx: typer.Context,
    name: Annotated[
        list[str] | None,
        typer.Option(
            "--name",
            "-n",
            help="Project name. Repeat with --sub: the first name is the repository, the others subprojects.",
        ),
    ] = None,
    libft: Annotated[bool, typer.Option("--libft", "-l", help="Vendor libft from the remembered URL.")] = False,
    libft_url: Annotated[
        str | None,
        typer.Option("--libft-url", "-u", help="Vendor libft from this URL and remember it as the default."),
    ] = None,
    libft_force: Annotated[
        str | None,
        typer.Option("--libft-force", help="Vendor libft from this URL and overwrite the remembered default."),
    ] = None,
    mlx: Annotated[bool, typer.Option("--mlx", "-m", help="Vendor the MinilibX graphics library.")] = False,
    link: Annotated[
        LinkMode,
        typer.Option("--link", "-L", case_sensitive=False, help="Header include style."),
    ] = LinkMode.ABSOLUTE,
    git: Annotated[
        list[str] | None,
        typer.Option("--git", "-g", help="Git remote as URL or NAME=URL. Repeat for several remotes."),
    ] = None,
    git_init: Annotated[bool, typer.Option("--git-init", help="Initialize a git repository without remotes.")] = False,
    cc: Annotated[str | None, typer.Option("--cc", "-c", help="Compiler written into the Makefile.")] = None,
    lang: Annotated[Language, typer.Option("--lang", case_sensitive=False, help="Project language.")] = Language.C,
    sub: Annotated[bool, typer.Option("--sub", "-s", help="Create subprojects inside one repository.")] = False,
    interactive: Annotated[bool, typer.Option("--interactive", "-i", help="Prompt for every option.")] = False,
    working_dir: WorkingDirOption = None,
) -> None:
    """Create a project skeleton: sources, header, Makefile and optional dependencies.

    Examples:

        # Plain C project
        buildinette -n push_swap

        # Remember libft and vendor it, include headers through -Iincludes
        buildinette -n so_long -u git@github.com:me/libft.git -L relative -m

        # C++ module with one subproject per exercise
        buildinette --lang cpp --sub -n cpp00 -n ex00 -n ex01 -g git@host:me/cpp00.git
    """
    state = _get_state(ctx)

    options = ScaffoldOptions(
        names=name or [],
        libft=libft,
        libft_url=libft_url,
        libft_force=libft_force,
        mlx=mlx,
        link=link,
        remotes=git or [],
        git_init=git_init,
        compiler=cc,
        language=lang,
        subprojects=sub,
        interactive=interactive,
        working_dir=working_dir,
    )
    if interactive:
        options = collect_interactive_options(TyperPrompter(), state.config, settings.toolchain, base=options)

    match resolve_plan(options, state.config, settings.toolchain, state.store):
        case Ok(plan):
            pass
        case Err(error):
            _handle_error(error)
            if not options.names:
                typer.echo(ctx.get_usage(), err=True)
            raise typer.Exit(code=1)

    match Scaffolder().run(plan):
        case Ok(report):
            _print_summary(plan, report)
        case Err(error):
            _handle_error(error)
            raise typer.Exit(code=1)


def _get_state(ctx: typer.Context) -> CliState:
    if isinstance(ctx.obj, CliState):
        return ctx.obj

    store = FileConfigStore(settings.paths)
    match store.load():
        case Ok(config):
            ctx.obj = CliState(store=store, config=config)
            return ctx.obj
        case Err(error):
            handle_config_error(error)
            raise typer.Exit(code=1)


def _print_summary(plan: ScaffoldPlan, report: ScaffoldReport) -> None:
    for warning in report.warnings:
        typer.secho(f"warning: {warning}", err=True, fg=typer.colors.YELLOW)
    for dependency in report.skipped:
        typer.secho(
            f"hint: the Makefile still builds {dependency.local_path}; clone it manually",
            err=True,
            fg=typer.colors.CYAN,
        )

    for project in plan.projects:
        typer.secho(f"✓ Project '{project.name}' structure created in {project.target_directory}", fg=typer.colors.GREEN)

    skipped = {dependency.kind for dependency in report.skipped}
    for dependency in plan.dependencies:
        if dependency.kind in skipped:
            continue
        if dependency.kind == DependencyKind.LIBRARY:
            typer.echo(f"• libft cloned from {dependency.source_url}")
        else:
            typer.echo("• MinilibX support enabled")
            if settings.toolchain.is_darwin:
                typer.secho("hint: macOS users should install XQuartz for MinilibX support", fg=typer.colors.CYAN)

    if report.repository is not None:
        typer.echo(f"• Git repository initialized in {report.repository}")
        for remote in report.remotes:
            typer.echo(f"  remote {remote.name} -> {remote.url}")
        if report.remotes:
            first = report.remotes[0].name
            typer.secho(f"hint: push using git push --set-upstream {first} master", fg=typer.colors.CYAN)


def _handle_error(error: ScaffoldError) -> None:
    """Handle scaffolding errors with user-friendly messages."""
    match error:
        case OptionsError(message=message, hint=hint):
            typer.secho(f"error: {message}", err=True, fg=typer.colors.RED)
            if hint:
                typer.secho(f"hint: {hint}", err=True, fg=typer.colors.CYAN)
        case GenerateError(path=path, message=message):
            typer.secho(f"error: cannot create project skeleton at {path}", err=True, fg=typer.colors.RED)
            typer.secho(f"  {message}", err=True)
        case FetchError(kind=kind, url=url, message=message):
            typer.secho(f"error: failed to fetch {kind.value} dependency", err=True, fg=typer.colors.RED)
            typer.secho(f"  {message}", err=True)
            typer.secho(f"hint: verify that {url or 'the repository'} is reachable", err=True, fg=typer.colors.CYAN)
        case RepositoryError(path=path, message=message):
            typer.secho(f"error: failed to initialize git repository in {path}", err=True, fg=typer.colors.RED)
            typer.secho(f"  {message}", err=True)
        case _:  # pragma: no cover - fallback for unexpected subclasses
            typer.secho(f"error: {error.message}", err=True, fg=typer.colors.RED)


def handle_config_error(error: ConfigError) -> None:
    match error:
        case ConfigYamlError(path=path, line=line, message=message):
            location = f"{path}:{line}" if line is not None else str(path)
            typer.secho(f"error: invalid YAML in {location}", err=True, fg=typer.colors.RED)
            typer.secho(f"  {message}", err=True)
        case ConfigValidationError(path=path, field=field, message=message):
            scope = f" ({field})" if field else ""
            typer.secho(f"error: invalid configuration{scope} in {path}", err=True, fg=typer.colors.RED)
            typer.secho(f"  {message}", err=True)
        case ConfigIOError(path=path, message=message):
            typer.secho(f"error: cannot access configuration {path}", err=True, fg=typer.colors.RED)
            typer.secho(f"  {message}", err=True)
        case DefaultAlreadySetError(message=message):
            typer.secho(f"error: {message}", err=True, fg=typer.colors.RED)
