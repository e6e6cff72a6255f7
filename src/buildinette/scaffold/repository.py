"""Repository initializer: git init plus remote registration."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from result import Ok, Result, is_err

from buildinette.common import create_logger
from buildinette.utils.git import add_remote, init_repository, is_repository

from .models import RemoteSpec, RepositoryError

logger = create_logger("scaffold.repository")


def initialize_repository(directory: Path) -> Result[Path, RepositoryError]:
    """Run git init in directory unless it already is a repository."""
    if is_repository(directory):
        logger.debug("Repository already initialized", path=str(directory))
        return Ok(directory)

    return (
        init_repository(directory)
        .map_err(lambda err: RepositoryError(path=directory, message=err.message))
        .inspect(lambda path: logger.info("Repository initialized", path=str(path)))
    )


def register_remotes(directory: Path, remotes: Sequence[RemoteSpec]) -> tuple[list[RemoteSpec], list[RepositoryError]]:
    """Register each remote in order.

    A failing remote (typically a duplicate name on a re-run) does not stop
    the remaining ones; its error is returned alongside the added remotes.
    """
    added: list[RemoteSpec] = []
    errors: list[RepositoryError] = []

    for remote in remotes:
        result = add_remote(directory, remote.name, remote.url)
        if is_err(result):
            logger.warning("Failed to add remote", name=remote.name, url=remote.url, error=result.err().message)
            errors.append(RepositoryError(path=directory, message=result.err().message))
            continue
        logger.info("Remote added", name=remote.name, url=remote.url)
        added.append(remote)

    return added, errors


def setup_repository(
    directory: Path,
    remotes: Sequence[RemoteSpec],
) -> Result[tuple[list[RemoteSpec], list[RepositoryError]], RepositoryError]:
    init_result = initialize_repository(directory)
    if is_err(init_result):
        return init_result
    return Ok(register_remotes(directory, remotes))
