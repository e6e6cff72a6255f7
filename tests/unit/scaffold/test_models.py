from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from buildinette.scaffold.models import (
    BuildConfig,
    DependencyKind,
    DependencySpec,
    Language,
    LinkMode,
    ProjectSpec,
    RemoteSpec,
    ScaffoldPlan,
)


def test_c_project_layout() -> None:
    project = ProjectSpec(name="foo", target_directory=Path("foo"))

    assert project.language == Language.C
    assert project.link_mode == LinkMode.ABSOLUTE
    assert project.source_dir == "srcs"
    assert project.include_dir == "includes"
    assert project.source_filename == "foo.c"
    assert project.header_filename == "foo.h"


def test_cpp_project_layout() -> None:
    project = ProjectSpec(name="ex00", target_directory=Path("ex00"), language=Language.CPP)

    assert project.source_dir == "src"
    assert project.include_dir == "include"
    assert project.source_filename == "ex00.cpp"
    assert project.header_filename == "ex00.hpp"
    assert project.header_guard == "EX00_HPP"


@pytest.mark.parametrize(
    ("name", "guard"),
    [
        ("foo", "FOO_H"),
        ("push_swap", "PUSH_SWAP_H"),
        ("so-long", "SO_LONG_H"),
        ("mini.rt", "MINI_RT_H"),
    ],
)
def test_header_guard_is_uppercased_identifier(name: str, guard: str) -> None:
    assert ProjectSpec(name=name, target_directory=Path(name)).header_guard == guard


@pytest.mark.parametrize("name", ["", ".", "..", "a/b", "-rf", "with space"])
def test_project_name_must_be_filesystem_safe(name: str) -> None:
    with pytest.raises(ValidationError):
        ProjectSpec(name=name, target_directory=Path("x"))


def test_dependency_local_paths() -> None:
    assert DependencySpec(kind=DependencyKind.LIBRARY).local_path == Path("libft")
    assert DependencySpec(kind=DependencyKind.GRAPHICS).local_path == Path("mlx")


def test_dependency_rejects_non_git_url() -> None:
    with pytest.raises(ValidationError):
        DependencySpec(kind=DependencyKind.LIBRARY, source_url="libft")


def test_plan_requires_a_project() -> None:
    with pytest.raises(ValidationError):
        ScaffoldPlan(projects=(), build=BuildConfig(compiler="gcc"), repository_root=Path("foo"))


def test_plan_wants_repository_with_remotes_or_init_flag() -> None:
    project = ProjectSpec(name="foo", target_directory=Path("foo"))
    build = BuildConfig(compiler="gcc")

    plain = ScaffoldPlan(projects=(project,), build=build, repository_root=Path("foo"))
    with_remote = ScaffoldPlan(
        projects=(project,),
        build=build,
        repository_root=Path("foo"),
        remotes=(RemoteSpec(name="origin", url="git@host:foo.git"),),
    )
    with_init = ScaffoldPlan(projects=(project,), build=build, repository_root=Path("foo"), init_repository=True)

    assert plain.wants_repository is False
    assert with_remote.wants_repository is True
    assert with_init.wants_repository is True


def test_models_are_frozen() -> None:
    project = ProjectSpec(name="foo", target_directory=Path("foo"))

    with pytest.raises(ValidationError):
        project.name = "bar"


def test_header_guard_keeps_leading_digit() -> None:
    assert ProjectSpec(name="42sh", target_directory=Path("42sh")).header_guard == "42SH_H"
