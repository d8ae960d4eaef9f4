"""Tests for repo discovery scanner."""

import os
import tempfile

import pytest

from repolist.scanner import RepoRoot, find_repos, is_repo_root


def test_find_repos_single():
    with tempfile.TemporaryDirectory() as tmp:
        os.makedirs(os.path.join(tmp, "project-a", ".git"))
        repos = find_repos([RepoRoot(tmp, 1)])
        assert repos == [os.path.join(tmp, "project-a")]


def test_find_repos_multiple():
    with tempfile.TemporaryDirectory() as tmp:
        os.makedirs(os.path.join(tmp, "alpha", ".git"))
        os.makedirs(os.path.join(tmp, "beta", ".git"))
        os.makedirs(os.path.join(tmp, "gamma", ".git"))
        repos = find_repos([RepoRoot(tmp, 1)])
        assert len(repos) == 3


def test_find_repos_nested_not_counted():
    """Repos inside other repos should be skipped (not recursed into)."""
    with tempfile.TemporaryDirectory() as tmp:
        os.makedirs(os.path.join(tmp, "parent", ".git"))
        os.makedirs(os.path.join(tmp, "parent", "child", ".git"))
        repos = find_repos([RepoRoot(tmp, 5)])
        assert repos == [os.path.join(tmp, "parent")]


def test_find_repos_root_is_repo():
    with tempfile.TemporaryDirectory() as tmp:
        os.makedirs(os.path.join(tmp, ".git"))
        os.makedirs(os.path.join(tmp, "inner", ".git"))
        assert find_repos([RepoRoot(tmp, 0)]) == [tmp]
        assert find_repos([RepoRoot(tmp, 3)]) == [tmp]


def test_find_repos_depth_zero_plain_dir():
    with tempfile.TemporaryDirectory() as tmp:
        os.makedirs(os.path.join(tmp, "child", ".git"))
        assert find_repos([RepoRoot(tmp, 0)]) == []


def test_find_repos_skips_hidden():
    with tempfile.TemporaryDirectory() as tmp:
        os.makedirs(os.path.join(tmp, ".hidden-project", ".git"))
        os.makedirs(os.path.join(tmp, "visible", ".git"))
        repos = find_repos([RepoRoot(tmp, 1)])
        assert len(repos) == 1
        assert "visible" in repos[0]


def test_find_repos_git_file_marker():
    """Worktrees and submodules have a .git file instead of a directory."""
    with tempfile.TemporaryDirectory() as tmp:
        wt = os.path.join(tmp, "worktree")
        os.makedirs(wt)
        with open(os.path.join(wt, ".git"), "w") as f:
            f.write("gitdir: /somewhere/else\n")
        assert is_repo_root(wt)
        assert find_repos([RepoRoot(tmp, 1)]) == [wt]


def test_find_repos_ignores_files():
    with tempfile.TemporaryDirectory() as tmp:
        with open(os.path.join(tmp, "notes.txt"), "w") as f:
            f.write("not a dir\n")
        assert find_repos([RepoRoot(tmp, 2)]) == []


def test_find_repos_empty():
    with tempfile.TemporaryDirectory() as tmp:
        assert find_repos([RepoRoot(tmp, 3)]) == []


def test_find_repos_missing_root():
    assert find_repos([RepoRoot("/nonexistent/path/for/repolist", 3)]) == []


def test_find_repos_max_depth():
    with tempfile.TemporaryDirectory() as tmp:
        deep = os.path.join(tmp, "a", "b", "c", "d", "e", "f", "g", ".git")
        os.makedirs(deep)
        assert find_repos([RepoRoot(tmp, 3)]) == []
        assert find_repos([RepoRoot(tmp, 6)]) == []
        assert len(find_repos([RepoRoot(tmp, 7)])) == 1


def test_find_repos_end_to_end_layout():
    with tempfile.TemporaryDirectory() as tmp:
        os.makedirs(os.path.join(tmp, "proj", ".git"))
        os.makedirs(os.path.join(tmp, "group", "alpha", ".git"))
        os.makedirs(os.path.join(tmp, "group", "beta", ".git"))
        repos = find_repos([RepoRoot(tmp, 2)])
        assert sorted(os.path.basename(r) for r in repos) == ["alpha", "beta", "proj"]


def test_find_repos_keeps_root_order_and_duplicates():
    with tempfile.TemporaryDirectory() as tmp:
        os.makedirs(os.path.join(tmp, "b", "two", ".git"))
        os.makedirs(os.path.join(tmp, "a", "one", ".git"))
        repos = find_repos([
            RepoRoot(os.path.join(tmp, "b"), 1),
            RepoRoot(os.path.join(tmp, "a"), 1),
            RepoRoot(tmp, 2),
        ])
        names = [os.path.basename(r) for r in repos]
        assert names[:2] == ["two", "one"]
        assert len(repos) == 4


def test_find_repos_expands_home(monkeypatch):
    with tempfile.TemporaryDirectory() as tmp:
        monkeypatch.setenv("HOME", tmp)
        os.makedirs(os.path.join(tmp, "code", "proj", ".git"))
        repos = find_repos([RepoRoot("~/code", 1)])
        assert repos == [os.path.join(tmp, "code", "proj")]


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs unprivileged POSIX user")
def test_find_repos_unreadable_subtree():
    with tempfile.TemporaryDirectory() as tmp:
        locked = os.path.join(tmp, "locked")
        os.makedirs(os.path.join(locked, "hidden-repo", ".git"))
        os.makedirs(os.path.join(tmp, "open", ".git"))
        os.chmod(locked, 0)
        try:
            repos = find_repos([RepoRoot(tmp, 2)])
        finally:
            os.chmod(locked, 0o755)
        assert repos == [os.path.join(tmp, "open")]


def test_find_repos_unreadable_dir_skipped(monkeypatch):
    with tempfile.TemporaryDirectory() as tmp:
        locked = os.path.join(tmp, "locked")
        os.makedirs(os.path.join(locked, "hidden-repo", ".git"))
        os.makedirs(os.path.join(tmp, "open", ".git"))
        real_scandir = os.scandir

        def scandir(path):
            if os.fspath(path) == locked:
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)
        repos = find_repos([RepoRoot(tmp, 2)])
        monkeypatch.undo()
        assert repos == [os.path.join(tmp, "open")]


@pytest.mark.skipif(not hasattr(os, "symlink") or os.name != "posix", reason="needs symlinks")
def test_find_repos_follows_symlinked_dirs():
    with tempfile.TemporaryDirectory() as tmp, tempfile.TemporaryDirectory() as elsewhere:
        os.makedirs(os.path.join(elsewhere, "proj", ".git"))
        root = os.path.join(tmp, "root")
        os.makedirs(root)
        os.symlink(os.path.join(elsewhere, "proj"), os.path.join(root, "linked"))
        assert find_repos([RepoRoot(root, 1)]) == [os.path.join(root, "linked")]


@pytest.mark.skipif(not hasattr(os, "symlink") or os.name != "posix", reason="needs symlinks")
def test_find_repos_symlink_loop_terminates():
    with tempfile.TemporaryDirectory() as tmp:
        os.makedirs(os.path.join(tmp, "a", "repo", ".git"))
        os.symlink(tmp, os.path.join(tmp, "a", "back"))
        repos = find_repos([RepoRoot(tmp, 10)])
        assert repos == [os.path.join(tmp, "a", "repo")]
