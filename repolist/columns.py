"""Column definitions — what each cell of a repo row shows.

Every column kind is a plain function ``(repo, **options) -> str | Text | None``
registered in COLUMN_KINDS. A ColumnSpec binds one kind, its options and its
layout (header, width, alignment). Column functions get the repository path
explicitly from the NamedRepo they are given; none of them depend on the
process working directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Optional, Union

from rich.text import Text

from repolist import git
from repolist.errors import ConfigError
from repolist.names import NamedRepo
from repolist.theme import DIRTY, EMPHASIS, FLAG, IDENT, PATH

Cell = Union[str, Text]
ColumnFunction = Callable[..., Optional[Cell]]


@dataclass(frozen=True)
class ColumnSpec:
    header: str
    width: int
    compute: Callable[[NamedRepo], Optional[Cell]]
    align_right: bool = False
    kind: str = ""


# ── Flag predicates ─────────────────────────────────────────────────────

FLAG_PREDICATES: dict[str, Callable[[str], Any]] = {
    "untracked": git.untracked_files,
    "unstaged": git.unstaged_files,
    "staged": git.staged_files,
}

DEFAULT_FLAGS: list[tuple[str, str]] = [
    ("untracked", "N"),
    ("unstaged", "U"),
    ("staged", "S"),
]


def flag_count(result: Any) -> Optional[int]:
    """Normalize a predicate result: collections to their length, bools to 0/1."""
    if result is None:
        return None
    if isinstance(result, bool):
        return int(result)
    if isinstance(result, int):
        return result
    return len(result)


def count_glyph(count: Optional[int]) -> str:
    """One character for a count: blank for none, digit up to 9, "+" beyond."""
    if not count:
        return " "
    if count > 9:
        return "+"
    return str(count)


# ── Column kinds ────────────────────────────────────────────────────────


def column_ident(repo: NamedRepo) -> Cell:
    return Text(repo.id, style=IDENT)


def column_path(repo: NamedRepo, abbreviate_home: bool = True) -> Cell:
    path = repo.path
    if abbreviate_home:
        home = os.path.expanduser("~")
        if path == home:
            path = "~"
        elif path.startswith(home.rstrip(os.sep) + os.sep):
            path = "~" + path[len(home.rstrip(os.sep)):]
    return Text(path, style=PATH)


def column_version(repo: NamedRepo) -> Optional[Cell]:
    v = git.version(repo.path)
    if v is None:
        return None
    text = Text(v)
    if v.endswith("-dirty"):
        text.stylize(DIRTY, len(v) - len("dirty"))
    return text


def column_branch(repo: NamedRepo) -> Optional[Cell]:
    return git.current_branch(repo.path)


def column_upstream(repo: NamedRepo) -> Optional[Cell]:
    return git.upstream_branch(repo.path)


def column_push_branch(repo: NamedRepo) -> Optional[Cell]:
    return git.push_branch(repo.path)


def _count_cell(n: int, threshold: int = 0) -> Text:
    return Text(str(n), style=EMPHASIS if n > threshold else "")


def _diff_count(repo: NamedRepo, target: Callable[[str], Optional[str]], behind: bool) -> Optional[Cell]:
    ref = target(repo.path)
    if ref is None:
        return None
    counts = git.rev_diff_count(repo.path, "HEAD", ref)
    if counts is None:
        return None
    ahead_n, behind_n = counts
    return _count_cell(behind_n if behind else ahead_n)


def column_unpulled_from_upstream(repo: NamedRepo) -> Optional[Cell]:
    return _diff_count(repo, git.upstream_branch, behind=True)


def column_unpushed_to_upstream(repo: NamedRepo) -> Optional[Cell]:
    return _diff_count(repo, git.upstream_branch, behind=False)


def column_unpulled_from_pushremote(repo: NamedRepo) -> Optional[Cell]:
    return _diff_count(repo, git.push_branch, behind=True)


def column_unpushed_to_pushremote(repo: NamedRepo) -> Optional[Cell]:
    return _diff_count(repo, git.push_branch, behind=False)


def column_branches(repo: NamedRepo) -> Cell:
    return _count_cell(len(git.local_branches(repo.path)), threshold=1)


def column_stashes(repo: NamedRepo) -> Cell:
    return _count_cell(len(git.stashes(repo.path)), threshold=0)


def column_flag(repo: NamedRepo, flags: list[tuple[str, str]] = DEFAULT_FLAGS) -> Optional[Cell]:
    """Glyph of the first predicate in flags that matches."""
    for predicate, glyph in flags:
        if flag_count(FLAG_PREDICATES[predicate](repo.path)):
            return Text(glyph, style=FLAG)
    return None


def column_flags(repo: NamedRepo, flags: list[tuple[str, str]] = DEFAULT_FLAGS) -> Cell:
    """One glyph per predicate, in order, blank where it doesn't match."""
    text = Text()
    for predicate, glyph in flags:
        if flag_count(FLAG_PREDICATES[predicate](repo.path)):
            text.append(glyph, style=FLAG)
        else:
            text.append(" ")
    return text


def column_status(repo: NamedRepo, flags: list[tuple[str, str]] = DEFAULT_FLAGS) -> Cell:
    """One count glyph per predicate, in order."""
    text = Text()
    for predicate, _glyph in flags:
        glyph = count_glyph(flag_count(FLAG_PREDICATES[predicate](repo.path)))
        text.append(glyph, style=FLAG if glyph != " " else "")
    return text


COLUMN_KINDS: dict[str, ColumnFunction] = {
    "ident": column_ident,
    "path": column_path,
    "version": column_version,
    "branch": column_branch,
    "upstream": column_upstream,
    "push-branch": column_push_branch,
    "unpulled-from-upstream": column_unpulled_from_upstream,
    "unpushed-to-upstream": column_unpushed_to_upstream,
    "unpulled-from-pushremote": column_unpulled_from_pushremote,
    "unpushed-to-pushremote": column_unpushed_to_pushremote,
    "branches": column_branches,
    "stashes": column_stashes,
    "flag": column_flag,
    "flags": column_flags,
    "status": column_status,
}

FLAG_KINDS = frozenset({"flag", "flags", "status"})

# ── Construction from config data ───────────────────────────────────────


def _parse_width(header: str, width: Any) -> int:
    if isinstance(width, bool):
        raise ConfigError(f"column {header!r}: width must be a positive integer, got {width!r}")
    if isinstance(width, str) and width.strip().isdigit():
        width = int(width.strip())
    if not isinstance(width, int) or width <= 0:
        raise ConfigError(f"column {header!r}: width must be a positive integer, got {width!r}")
    return width


def _parse_flags(header: str, raw: Any) -> list[tuple[str, str]]:
    if not isinstance(raw, list) or not raw:
        raise ConfigError(f"column {header!r}: flags must be a non-empty list of [predicate, glyph]")
    flags: list[tuple[str, str]] = []
    for item in raw:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ConfigError(f"column {header!r}: bad flag entry {item!r}")
        predicate, glyph = item
        if predicate not in FLAG_PREDICATES:
            known = ", ".join(sorted(FLAG_PREDICATES))
            raise ConfigError(f"column {header!r}: unknown flag predicate {predicate!r} (known: {known})")
        if not isinstance(glyph, str) or len(glyph) != 1:
            raise ConfigError(f"column {header!r}: flag glyph must be a single character, got {glyph!r}")
        flags.append((predicate, glyph))
    return flags


def make_column(
    header: str,
    width: Any,
    kind: str,
    align_right: bool = False,
    **options: Any,
) -> ColumnSpec:
    """Build a ColumnSpec for one of the registered column kinds."""
    fn = COLUMN_KINDS.get(kind)
    if fn is None:
        known = ", ".join(sorted(COLUMN_KINDS))
        raise ConfigError(f"column {header!r}: unknown kind {kind!r} (known: {known})")
    width = _parse_width(header, width)

    if "flags" in options:
        if kind not in FLAG_KINDS:
            raise ConfigError(f"column {header!r}: option 'flags' only applies to flag columns")
        options["flags"] = _parse_flags(header, options["flags"])
    if "abbreviate_home" in options and kind != "path":
        raise ConfigError(f"column {header!r}: option 'abbreviate_home' only applies to path columns")
    unknown = set(options) - {"flags", "abbreviate_home"}
    if unknown:
        raise ConfigError(f"column {header!r}: unknown options {', '.join(sorted(unknown))}")

    compute = partial(fn, **options) if options else fn
    return ColumnSpec(header=header, width=width, compute=compute, align_right=bool(align_right), kind=kind)


def build_columns(raw: Any) -> list[ColumnSpec]:
    """Build an ordered column list from config data (a list of dicts)."""
    if not isinstance(raw, list) or not raw:
        raise ConfigError("a column set must be a non-empty list of column objects")
    columns: list[ColumnSpec] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ConfigError(f"column definition must be an object, got {item!r}")
        item = dict(item)
        header = item.pop("header", None)
        if not isinstance(header, str) or not header:
            raise ConfigError(f"column definition needs a header: {item!r}")
        if "kind" not in item:
            raise ConfigError(f"column {header!r}: missing kind")
        if "width" not in item:
            raise ConfigError(f"column {header!r}: missing width")
        columns.append(make_column(header, **item))
    return columns
