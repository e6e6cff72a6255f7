"""Git utility functions."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from pydantic import BaseModel
from result import Err, Ok, Result


class GitError(BaseModel):
    """Base error for git operations."""

    message: str


class GitNotInstalledError(GitError):
    """Git command not found."""

    pass


class GitCloneError(GitError):
    """Failed to clone repository."""

    url: str


class GitInitError(GitError):
    """Failed to initialize a repository."""

    path: Path


class GitRemoteError(GitError):
    """Failed to register a remote."""

    name: str
    url: str


def is_repository(path: Path) -> bool:
    return (path / ".git").exists()


def clone_repository(
    url: str,
    destination: Path,
    *,
    depth: int = 1,
) -> Result[Path, GitError]:
    if destination.exists():
        return Err(GitCloneError(url=url, message=f"Destination already exists: {destination}"))

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)

        subprocess.run(
            ["git", "clone", "--depth", str(depth), url, str(destination)],
            capture_output=True,
            text=True,
            check=True,
        )

        return Ok(destination)

    except FileNotFoundError:
        return Err(GitNotInstalledError(message="git command not found. Please install git."))
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.strip() if e.stderr else "Unknown error"
        return Err(GitCloneError(url=url, message=f"Failed to clone repository: {stderr}"))
    except OSError as e:
        return Err(GitCloneError(url=url, message=f"Unexpected error cloning repository: {e}"))


def strip_history(repository: Path) -> Result[Path, GitError]:
    """Remove the .git metadata so the checkout becomes plain files."""
    git_dir = repository / ".git"
    try:
        if git_dir.is_dir():
            shutil.rmtree(git_dir)
        elif git_dir.exists():
            # worktrees and submodules use a .git file
            git_dir.unlink()
        return Ok(repository)
    except OSError as e:
        return Err(GitError(message=f"Failed to remove {git_dir}: {e}"))


def init_repository(path: Path) -> Result[Path, GitError]:
    try:
        subprocess.run(
            ["git", "init"],
            cwd=path,
            capture_output=True,
            text=True,
            check=True,
        )
        return Ok(path)

    except FileNotFoundError:
        return Err(GitNotInstalledError(message="git command not found. Please install git."))
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.strip() if e.stderr else "Unknown error"
        return Err(GitInitError(path=path, message=f"Failed to initialize repository: {stderr}"))


def add_remote(path: Path, name: str, url: str) -> Result[str, GitError]:
    try:
        subprocess.run(
            ["git", "remote", "add", name, url],
            cwd=path,
            capture_output=True,
            text=True,
            check=True,
        )
        return Ok(name)

    except FileNotFoundError:
        return Err(GitNotInstalledError(message="git command not found. Please install git."))
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.strip() if e.stderr else "Unknown error"
        return Err(GitRemoteError(name=name, url=url, message=f"Failed to add remote '{name}': {stderr}"))
