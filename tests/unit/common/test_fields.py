from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from buildinette.common import GitUrl, ProjectName

git_url = TypeAdapter(GitUrl)
project_name = TypeAdapter(ProjectName)


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/42paris/minilibx-linux.git",
        "ssh://git@github.com/me/libft.git",
        "git@github.com:me/libft.git",
        "me@vogsphere.42.fr:intra/libft.git",
        "deploy.bot@git-host.local:libft.git",
        "file:///srv/libft.git",
        "/srv/libft",
        "./libft",
        "~/code/libft",
    ],
)
def test_git_url_accepts_supported_forms(url: str) -> None:
    assert git_url.validate_python(url) == url


@pytest.mark.parametrize("url", ["libft", "github.com:me/libft.git", "@host:libft.git", ""])
def test_git_url_rejects_bare_words(url: str) -> None:
    with pytest.raises(ValidationError):
        git_url.validate_python(url)


@pytest.mark.parametrize("name", ["foo", "push_swap", "so-long", "42sh", "mini.rt"])
def test_project_name_accepts_filesystem_safe_names(name: str) -> None:
    assert project_name.validate_python(name) == name


@pytest.mark.parametrize("name", [".", "..", "-rf", "a/b", "with space"])
def test_project_name_rejects_unsafe_names(name: str) -> None:
    with pytest.raises(ValidationError):
        project_name.validate_python(name)
