"""Shared helpers for building real git repos in tests."""

import os
import subprocess

import pytest


def git(path: str, *args: str) -> str:
    result = subprocess.run(["git", "-C", path, *args], capture_output=True, text=True)
    return result.stdout


def create_test_repo(path: str, commits: int = 2) -> str:
    """Create a real git repo with a few commits."""
    os.makedirs(path, exist_ok=True)
    subprocess.run(["git", "init", "-b", "main", path], capture_output=True)
    git(path, "config", "user.email", "test@test.com")
    git(path, "config", "user.name", "Test User")
    git(path, "config", "commit.gpgsign", "false")
    git(path, "config", "tag.gpgsign", "false")
    for i in range(commits):
        with open(os.path.join(path, "file.txt"), "a") as f:
            f.write(f"line {i}\n")
        git(path, "add", ".")
        git(path, "commit", "-m", f"Commit {i}")
    return path


def clone_repo(src: str, dest: str) -> str:
    subprocess.run(["git", "clone", src, dest], capture_output=True)
    git(dest, "config", "user.email", "test@test.com")
    git(dest, "config", "user.name", "Test User")
    git(dest, "config", "commit.gpgsign", "false")
    return dest


def commit_file(path: str, name: str, content: str = "x\n", message: str = "change") -> None:
    with open(os.path.join(path, name), "w") as f:
        f.write(content)
    git(path, "add", name)
    git(path, "commit", "-m", message)


@pytest.fixture
def isolated_git(monkeypatch, tmp_path):
    """Keep the user's global git config out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    return tmp_path
