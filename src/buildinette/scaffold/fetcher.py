"""Dependency fetcher: clone a repository and vendor it as plain files."""

from __future__ import annotations

from pathlib import Path

from result import Err, Result

from buildinette.common import create_logger
from buildinette.utils.git import clone_repository, strip_history

from .models import DependencySpec, FetchError

logger = create_logger("scaffold.fetcher")

type FetchResult = Result[Path, FetchError]


def fetch_dependency(dependency: DependencySpec, project_dir: Path) -> FetchResult:
    """Clone dependency into project_dir and remove its .git metadata."""
    if dependency.source_url is None:
        return Err(
            FetchError(
                kind=dependency.kind,
                url="",
                message=f"No repository URL configured for {dependency.kind.value} dependency",
            )
        )

    url = dependency.source_url
    destination = project_dir / dependency.local_path

    def log_success(path: Path) -> None:
        logger.info("Dependency vendored", kind=dependency.kind.value, url=url, path=str(path))

    def log_error(err: FetchError) -> None:
        logger.error("Failed to vendor dependency", kind=dependency.kind.value, url=url, error=err.message)

    logger.debug("Fetching dependency", kind=dependency.kind.value, url=url, destination=str(destination))
    return (
        clone_repository(url, destination)
        .and_then(strip_history)
        .map_err(lambda err: FetchError(kind=dependency.kind, url=url, message=err.message))
        .inspect(log_success)
        .inspect_err(log_error)
    )
