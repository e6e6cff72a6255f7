"""Jinja2 rendering of the skeleton files.

Each artifact is a fixed template under ``scaffold/templates/`` with named
fields substituted from a ``ProjectSpec``, a ``BuildConfig`` and the selected
dependencies. Rendering is pure: nothing here touches the filesystem besides
loading templates.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .models import BuildConfig, DependencyKind, DependencySpec, LinkMode, ProjectSpec

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Sub-build order in the Makefile, library first
_BUILD_ORDER = (DependencyKind.LIBRARY, DependencyKind.GRAPHICS)
# Dependencies whose own Makefile has an fclean target
_FCLEAN_KINDS = frozenset({DependencyKind.LIBRARY})


class TemplateRenderer:
    """Renders the header, source and Makefile templates."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else _DEFAULT_TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        return self.env.get_template(template_name).render(**context)

    def render_header(self, project: ProjectSpec, dependencies: Sequence[DependencySpec] = ()) -> str:
        return self.render(
            "header.j2",
            {"project": project, "graphics_include": graphics_include(project, dependencies)},
        )

    def render_source(self, project: ProjectSpec) -> str:
        return self.render("source.j2", {"project": project, "header_include": header_include(project)})

    def render_makefile(
        self,
        project: ProjectSpec,
        build: BuildConfig,
        dependencies: Sequence[DependencySpec] = (),
    ) -> str:
        ordered = ordered_dependencies(dependencies)
        return self.render(
            "Makefile.j2",
            {
                "project": project,
                "build": build,
                "build_dirs": [dep.local_path.as_posix() for dep in ordered],
                "fclean_dirs": [dep.local_path.as_posix() for dep in ordered if dep.kind in _FCLEAN_KINDS],
            },
        )


def ordered_dependencies(dependencies: Sequence[DependencySpec]) -> list[DependencySpec]:
    return sorted(dependencies, key=lambda dep: _BUILD_ORDER.index(dep.kind))


def header_include(project: ProjectSpec) -> str:
    if project.link_mode == LinkMode.RELATIVE:
        return project.header_filename
    return f"../{project.include_dir}/{project.header_filename}"


def graphics_include(project: ProjectSpec, dependencies: Sequence[DependencySpec]) -> str | None:
    if not any(dep.kind == DependencyKind.GRAPHICS for dep in dependencies):
        return None
    if project.link_mode == LinkMode.RELATIVE:
        return "mlx.h"
    return "../mlx/mlx.h"
