from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from result import Err, Ok, is_err, is_ok

from buildinette.scaffold.models import (
    BuildConfig,
    DependencyKind,
    DependencySpec,
    FetchError,
    FetchFailurePolicy,
    GenerateError,
    ProjectSpec,
    RemoteSpec,
    RepositoryError,
    ScaffoldPlan,
)
from buildinette.scaffold.scaffolder import Scaffolder

LIBFT = DependencySpec(kind=DependencyKind.LIBRARY, source_url="https://github.com/example/libft.git")
MLX = DependencySpec(kind=DependencyKind.GRAPHICS, source_url="https://github.com/42paris/minilibx-linux.git")
ORIGIN = RemoteSpec(name="origin", url="git@github.com:me/foo.git")


def _plan(root: Path, names: list[str] | None = None, **kwargs: object) -> ScaffoldPlan:
    names = names or [root.name]
    directories = [root] if len(names) == 1 else [root / name for name in names]
    return ScaffoldPlan(
        projects=tuple(ProjectSpec(name=name, target_directory=d) for name, d in zip(names, directories)),
        build=BuildConfig(compiler="gcc", compiler_flags=("-g3",)),
        repository_root=root,
        **kwargs,
    )


def _fake_fetch(dependency: DependencySpec, project_dir: Path) -> Ok[Path]:
    path = project_dir / dependency.local_path
    path.mkdir(parents=True)
    return Ok(path)


@pytest.fixture
def fetch():
    with patch("buildinette.scaffold.scaffolder.fetch_dependency", side_effect=_fake_fetch) as mock_fetch:
        yield mock_fetch


@pytest.fixture
def repository():
    with patch("buildinette.scaffold.scaffolder.setup_repository") as mock_setup:
        mock_setup.return_value = Ok(([], []))
        yield mock_setup


def test_plain_project(tmp_path: Path, fetch, repository) -> None:
    root = tmp_path / "foo"

    result = Scaffolder().run(_plan(root))

    assert is_ok(result)
    report = result.unwrap()
    assert report.projects == [root]
    assert report.vendored == []
    assert report.repository is None
    assert (root / "Makefile").is_file()
    fetch.assert_not_called()
    repository.assert_not_called()


def test_dependencies_are_vendored_per_project(tmp_path: Path, fetch, repository) -> None:
    root = tmp_path / "cpp00"
    plan = _plan(root, ["ex00", "ex01"], dependencies=(MLX, LIBFT))

    report = Scaffolder().run(plan).unwrap()

    assert report.vendored == [
        root / "ex00" / "libft",
        root / "ex00" / "mlx",
        root / "ex01" / "libft",
        root / "ex01" / "mlx",
    ]


def test_fetch_failure_aborts_by_default(tmp_path: Path, fetch, repository) -> None:
    error = FetchError(kind=DependencyKind.LIBRARY, url=LIBFT.source_url or "", message="clone failed")
    fetch.side_effect = None
    fetch.return_value = Err(error)

    result = Scaffolder().run(_plan(tmp_path / "bar", dependencies=(LIBFT,), init_repository=True))

    assert result == Err(error)
    assert (tmp_path / "bar" / "Makefile").is_file()
    repository.assert_not_called()


def test_fetch_failure_is_skipped_when_requested(tmp_path: Path, fetch, repository) -> None:
    error = FetchError(kind=DependencyKind.GRAPHICS, url=MLX.source_url or "", message="clone failed")

    def fetch_one(dependency: DependencySpec, project_dir: Path):
        if dependency.kind == DependencyKind.GRAPHICS:
            return Err(error)
        return _fake_fetch(dependency, project_dir)

    fetch.side_effect = fetch_one
    plan = _plan(tmp_path / "fdf", dependencies=(LIBFT, MLX), fetch_policy=FetchFailurePolicy.SKIP)

    report = Scaffolder().run(plan).unwrap()

    assert report.vendored == [tmp_path / "fdf" / "libft"]
    assert report.skipped == [MLX]
    assert report.warnings == ["clone failed"]


def test_repository_with_remotes(tmp_path: Path, fetch, repository) -> None:
    root = tmp_path / "foo"
    remote_error = RepositoryError(path=root, message="Failed to add remote 'backup': exists")
    repository.return_value = Ok(([ORIGIN], [remote_error]))

    report = Scaffolder().run(_plan(root, remotes=(ORIGIN,))).unwrap()

    repository.assert_called_once_with(root, (ORIGIN,))
    assert report.repository == root
    assert report.remotes == [ORIGIN]
    assert report.warnings == ["Failed to add remote 'backup': exists"]


def test_repository_init_failure(tmp_path: Path, fetch, repository) -> None:
    error = RepositoryError(path=tmp_path / "foo", message="git command not found")
    repository.return_value = Err(error)

    result = Scaffolder().run(_plan(tmp_path / "foo", init_repository=True))

    assert result == Err(error)


def test_generate_failure_stops_before_fetching(tmp_path: Path, fetch, repository) -> None:
    (tmp_path / "foo").write_text("not a directory")

    result = Scaffolder().run(_plan(tmp_path / "foo", dependencies=(LIBFT,)))

    assert is_err(result)
    assert isinstance(result.unwrap_err(), GenerateError)
    fetch.assert_not_called()
