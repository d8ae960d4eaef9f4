"""Git queries — one small subprocess call per question about a repo."""

from __future__ import annotations

import logging
import subprocess
from typing import Optional

from repolist.scanner import is_repo_root

log = logging.getLogger(__name__)

VERSION_DATE_FORMAT = "%Y%m%d.%H%M"


def _run_git(repo_path: str, args: list[str], timeout: int = 60) -> str:
    """Run a git command and return stdout, or "" if it failed."""
    try:
        result = subprocess.run(
            ["git", "-C", repo_path] + args,
            capture_output=True,
            text=True,
            timeout=timeout,
            errors="replace",
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as exc:
        log.debug("git %s in %s failed: %s", " ".join(args), repo_path, exc)
        return ""
    if result.returncode != 0:
        log.debug(
            "git %s in %s exited %d: %s",
            " ".join(args), repo_path, result.returncode, result.stderr.strip(),
        )
        return ""
    return result.stdout


def _git_string(repo_path: str, args: list[str]) -> Optional[str]:
    """First line of a git command's output, or None."""
    out = _run_git(repo_path, args).strip()
    if not out:
        return None
    return out.split("\n", 1)[0]


def _git_lines(repo_path: str, args: list[str]) -> list[str]:
    return [ln for ln in _run_git(repo_path, args).split("\n") if ln.strip()]


def _git_zlist(repo_path: str, args: list[str]) -> list[str]:
    """Split NUL-terminated output (-z) into file names."""
    return [p for p in _run_git(repo_path, args + ["-z"]).split("\0") if p]


def is_repo(path: str) -> bool:
    return is_repo_root(path)


# ── Revision ────────────────────────────────────────────────────────────


def describe(repo_path: str) -> Optional[str]:
    """Nearest tag description, e.g. v1.2-3-gabc1234-dirty."""
    return _git_string(repo_path, ["describe", "--tags", "--dirty"])


def pseudo_version(repo_path: str) -> Optional[str]:
    """Version for untagged repos: HEAD's commit date plus abbreviated hash."""
    return _git_string(repo_path, [
        "log", "-1", "--format=%cd-g%h", f"--date=format:{VERSION_DATE_FORMAT}", "HEAD",
    ])


def version(repo_path: str) -> Optional[str]:
    return describe(repo_path) or pseudo_version(repo_path)


# ── Branches ────────────────────────────────────────────────────────────


def current_branch(repo_path: str) -> Optional[str]:
    """Short name of the checked out branch, None when detached."""
    return _git_string(repo_path, ["symbolic-ref", "--quiet", "--short", "HEAD"])


def upstream_branch(repo_path: str) -> Optional[str]:
    return _git_string(repo_path, [
        "rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}",
    ])


def push_branch(repo_path: str) -> Optional[str]:
    return _git_string(repo_path, [
        "rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{push}",
    ])


def rev_diff_count(repo_path: str, a: str, b: str) -> Optional[tuple[int, int]]:
    """Commits only in a and only in b, as (ahead, behind) of a relative to b."""
    out = _git_string(repo_path, ["rev-list", "--count", "--left-right", f"{a}...{b}"])
    if out is None:
        return None
    parts = out.split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def local_branches(repo_path: str) -> list[str]:
    return _git_lines(repo_path, ["for-each-ref", "--format=%(refname:short)", "refs/heads"])


def stashes(repo_path: str) -> list[str]:
    return _git_lines(repo_path, ["stash", "list", "--format=%gd"])


# ── Working tree ────────────────────────────────────────────────────────


def untracked_files(repo_path: str) -> list[str]:
    return _git_zlist(repo_path, ["ls-files", "--others", "--exclude-standard"])


def unstaged_files(repo_path: str) -> list[str]:
    return _git_zlist(repo_path, ["diff", "--name-only"])


def staged_files(repo_path: str) -> list[str]:
    return _git_zlist(repo_path, ["diff", "--cached", "--name-only"])


def status_text(repo_path: str) -> str:
    """Full `git status` output for the status view."""
    return _run_git(repo_path, ["-c", "color.status=false", "status", "--branch"])
