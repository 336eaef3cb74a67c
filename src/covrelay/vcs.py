"""Repository metadata used to stamp Codacy submissions."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pygit2


class GitError(Exception):
    """Base error for repository lookups."""

    pass


class NotARepositoryError(GitError):
    """Path is not inside a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class UnbornHeadError(GitError):
    """Repository has no commits yet."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Repository has no commits: {path}")
        self.path = path


@dataclass(frozen=True, slots=True)
class RepoMetadata:
    """Commit and branch of the checked-out HEAD."""

    commit: str
    branch: str | None
    workdir: Path | None = None


def resolve_repository(base_dir: Path) -> RepoMetadata:
    """Find the repository enclosing *base_dir* and read its HEAD.

    Raises:
        NotARepositoryError: No repository contains ``base_dir``.
        UnbornHeadError: The repository has no commits.
    """
    git_dir = pygit2.discover_repository(str(base_dir))
    if git_dir is None:
        raise NotARepositoryError(str(base_dir))
    try:
        repo = pygit2.Repository(git_dir)
    except pygit2.GitError as e:
        raise NotARepositoryError(str(base_dir)) from e

    if repo.head_is_unborn:
        raise UnbornHeadError(str(base_dir))

    commit = repo.head.peel(pygit2.Commit)
    branch = None if repo.head_is_detached else repo.head.shorthand
    return RepoMetadata(
        commit=str(commit.id),
        branch=branch,
        workdir=Path(repo.workdir) if repo.workdir else None,
    )
