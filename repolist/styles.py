"""Style presets — named column sets and cycling between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from repolist.columns import ColumnSpec, build_columns
from repolist.errors import ConfigError

NAME = {"header": "Name", "width": 25, "kind": "ident"}
PATH = {"header": "Path", "width": 99, "kind": "path"}


def _count(header: str, kind: str) -> dict:
    return {"header": header, "width": 3, "kind": kind, "align_right": True}


BUILTIN_STYLES: dict[str, list[dict]] = {
    "simple": [NAME, PATH],
    "versioned": [
        NAME,
        {"header": "Version", "width": 25, "kind": "version"},
        _count("B<U", "unpulled-from-upstream"),
        _count("B>U", "unpushed-to-upstream"),
        PATH,
    ],
    "status": [
        NAME,
        {"header": "Branch", "width": 20, "kind": "branch"},
        {"header": "S", "width": 3, "kind": "status"},
        _count("B<U", "unpulled-from-upstream"),
        _count("B>U", "unpushed-to-upstream"),
        _count("B<P", "unpulled-from-pushremote"),
        _count("B>P", "unpushed-to-pushremote"),
        _count("#b", "branches"),
        _count("#s", "stashes"),
        PATH,
    ],
}

DEFAULT_CYCLE = ["simple", "versioned", "status"]
DEFAULT_COLUMNS = BUILTIN_STYLES["versioned"]


@dataclass
class StylePreset:
    name: str
    columns: list[ColumnSpec]


def next_style(cycle: list[str], current: Optional[str]) -> str:
    """The style after current in cycle, wrapping; the first if current isn't in it."""
    if not cycle:
        raise ConfigError("no styles configured to cycle through")
    if current is None or current not in cycle:
        return cycle[0]
    return cycle[(cycle.index(current) + 1) % len(cycle)]


class StyleCycler:
    """Holds the configured presets and builds their columns on demand.

    Column definitions are only validated when a style is requested, so
    one broken style doesn't stop the others from working.
    """

    def __init__(self, styles: dict[str, Any], cycle: list[str]) -> None:
        self.styles = styles
        self.cycle = list(cycle)

    def preset(self, name: str) -> StylePreset:
        if name not in self.styles:
            known = ", ".join(sorted(self.styles))
            raise ConfigError(f"unknown style {name!r} (known: {known})")
        try:
            columns = build_columns(self.styles[name])
        except ConfigError as exc:
            raise ConfigError(f"style {name!r}: {exc}") from exc
        return StylePreset(name=name, columns=columns)

    def next(self, current: Optional[str]) -> StylePreset:
        return self.preset(next_style(self.cycle, current))
