"""Display names — give every discovered repo a short, unique id."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

log = logging.getLogger(__name__)

# Joins a repo name to the names of its ancestors: "proj\x", "proj\x\repos".
SEPARATOR = "\\"


@dataclass(frozen=True)
class NamedRepo:
    id: str
    path: str


def _segments(path: str) -> list[str]:
    return [p for p in os.path.normpath(path).split(os.sep) if p]


def _uniquify(items: list[tuple[str, str, int]]) -> list[tuple[str, str]]:
    # items are (candidate, path, number of trailing path segments in candidate)
    groups: dict[str, list[tuple[str, int]]] = {}
    for name, path, used in items:
        groups.setdefault(name, []).append((path, used))

    result: list[tuple[str, str]] = []
    for name, members in groups.items():
        if len(members) == 1:
            result.append((name, members[0][0]))
            continue

        log.debug("name collision on %r between %d repos", name, len(members))
        climbed: list[tuple[str, str, int]] = []
        for path, used in members:
            parts = _segments(path)
            if used >= len(parts):
                # Nothing left to climb; the name stays as it is.
                result.append((name, path))
                continue
            climbed.append((name + SEPARATOR + parts[-(used + 1)], path, used + 1))
        result.extend(_uniquify(climbed))

    return result


def uniquify(pairs: list[tuple[str, str]]) -> list[tuple[str, str]]:
    """Resolve colliding names by appending ancestor directory names.

    pairs are (candidate name, path) with the candidate being the basename
    of path. Names that are already unique pass through unchanged. Colliding
    names get the next parent directory appended, level by level, until they
    differ. Once a path runs out of ancestors its name is left as is, so
    duplicates can only survive when path segments are exhausted.
    Exact duplicate pairs count once. Output order is not input order.
    """
    unique = dict.fromkeys(pairs)
    return _uniquify([(name, path, 1) for name, path in unique])


def name_repos(paths: list[str]) -> list[NamedRepo]:
    """Turn discovered repository paths into NamedRepos with unique ids."""
    pairs = []
    for path in paths:
        path = os.path.normpath(path)
        pairs.append((os.path.basename(path), path))
    return [NamedRepo(id=name, path=path) for name, path in uniquify(pairs)]
