"""Repo discovery — find git repositories under configured roots."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

log = logging.getLogger(__name__)

GIT_MARKER = ".git"


@dataclass(frozen=True)
class RepoRoot:
    """A directory to search and how many levels below it to look."""

    path: str
    max_depth: int = 0


def is_repo_root(path: str) -> bool:
    """True if path holds a .git directory or a .git file (worktree, submodule)."""
    return os.path.lexists(os.path.join(path, GIT_MARKER))


def _child_dirs(path: str) -> list[str]:
    try:
        entries = list(os.scandir(path))
    except OSError as exc:
        log.debug("skipping unreadable directory %s: %s", path, exc)
        return []

    subdirs: list[str] = []
    for entry in entries:
        if entry.name.startswith("."):
            continue
        try:
            if entry.is_dir():
                subdirs.append(entry.path)
        except OSError:
            continue
    subdirs.sort()
    return subdirs


def find_repos(roots: list[RepoRoot]) -> list[str]:
    """Return absolute paths of all repositories found under roots.

    Each root is searched down to its own max_depth. A directory that is a
    repository is reported and never descended into. Symlinked directories
    are followed, but each directory is visited at most once per root.
    Results keep the order of roots and are not deduplicated across roots.
    """
    repos: list[str] = []

    def _walk(path: str, depth: int, seen: set[tuple[int, int]]) -> None:
        try:
            st = os.stat(path)
        except OSError as exc:
            log.debug("skipping inaccessible directory %s: %s", path, exc)
            return
        key = (st.st_dev, st.st_ino)
        if key in seen:
            log.debug("already visited %s", path)
            return
        seen.add(key)

        if is_repo_root(path):
            log.debug("found repository %s", path)
            repos.append(path)
            # Never look inside a found repo for nested ones
            return
        if depth <= 0:
            return
        for d in _child_dirs(path):
            _walk(d, depth - 1, seen)

    for root in roots:
        path = os.path.abspath(os.path.expanduser(root.path))
        _walk(path, root.max_depth, set())

    return repos
