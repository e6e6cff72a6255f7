"""Writes a project skeleton to disk."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from result import Err, Ok, Result

from buildinette.common import create_logger

from .models import BuildConfig, DependencySpec, GenerateError, ProjectSpec
from .templates import TemplateRenderer

logger = create_logger("scaffold.generator")


def generate_project(
    project: ProjectSpec,
    build: BuildConfig,
    dependencies: Sequence[DependencySpec] = (),
    *,
    renderer: TemplateRenderer | None = None,
) -> Result[list[Path], GenerateError]:
    """Create the source/include folders and write header, source and Makefile.

    Returns the written file paths in the order header, source, Makefile.
    """
    renderer = renderer or TemplateRenderer()
    root = project.target_directory
    artifacts = [
        (root / project.include_dir / project.header_filename, renderer.render_header(project, dependencies)),
        (root / project.source_dir / project.source_filename, renderer.render_source(project)),
        (root / "Makefile", renderer.render_makefile(project, build, dependencies)),
    ]

    logger.debug("Generating project", name=project.name, path=str(root))
    written: list[Path] = []
    for path, content in artifacts:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write skeleton file", path=str(path), error=str(exc))
            return Err(GenerateError(path=path, message=f"Cannot write {path}: {exc}"))
        written.append(path)

    logger.info("Project generated", name=project.name, files=[str(path) for path in written])
    return Ok(written)
