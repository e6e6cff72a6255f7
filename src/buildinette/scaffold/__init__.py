"""Project scaffolding: option resolution, templates, dependencies, repository."""

from .fetcher import fetch_dependency
from .generator import generate_project
from .models import (
    BuildConfig,
    DependencyKind,
    DependencySpec,
    FetchError,
    FetchFailurePolicy,
    GenerateError,
    Language,
    LinkMode,
    OptionsError,
    ProjectSpec,
    RemoteSpec,
    RepositoryError,
    ScaffoldError,
    ScaffoldPlan,
    ScaffoldReport,
)
from .options import Prompter, ScaffoldOptions, build_config_for, collect_interactive_options, resolve_plan
from .repository import initialize_repository, register_remotes, setup_repository
from .scaffolder import Scaffolder
from .templates import TemplateRenderer

__all__ = [
    "BuildConfig",
    "DependencyKind",
    "DependencySpec",
    "FetchError",
    "FetchFailurePolicy",
    "GenerateError",
    "Language",
    "LinkMode",
    "OptionsError",
    "ProjectSpec",
    "Prompter",
    "RemoteSpec",
    "RepositoryError",
    "ScaffoldError",
    "ScaffoldOptions",
    "ScaffoldPlan",
    "ScaffoldReport",
    "Scaffolder",
    "TemplateRenderer",
    "build_config_for",
    "collect_interactive_options",
    "fetch_dependency",
    "generate_project",
    "initialize_repository",
    "register_remotes",
    "resolve_plan",
    "setup_repository",
]
