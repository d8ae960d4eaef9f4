"""Configuration — roots, columns, styles and sorting, read from JSON."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from repolist.columns import ColumnSpec, build_columns
from repolist.errors import ConfigError
from repolist.scanner import RepoRoot
from repolist.styles import BUILTIN_STYLES, DEFAULT_COLUMNS, DEFAULT_CYCLE

log = logging.getLogger(__name__)

CONFIG_ENV = "REPOLIST_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/repolist/config.json")


@dataclass
class Config:
    roots: list[RepoRoot] = field(default_factory=list)
    columns: list[ColumnSpec] = field(default_factory=lambda: build_columns(DEFAULT_COLUMNS))
    styles: dict[str, Any] = field(default_factory=lambda: dict(BUILTIN_STYLES))
    cycle: list[str] = field(default_factory=lambda: list(DEFAULT_CYCLE))
    sort_key: str = "Path"
    sort_reverse: bool = False


def config_path(explicit: Optional[str] = None) -> Path:
    if explicit:
        return Path(explicit).expanduser()
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def load_config_data(path: Path) -> dict:
    if not path.exists():
        log.debug("no config file at %s, using defaults", path)
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config {path}: top level must be an object")
    return data


def _parse_depth(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{where}: depth must be a non-negative integer, got {value!r}")
    return value


def parse_root(item: Any, default_depth: int = 0) -> RepoRoot:
    """Accept [path, depth], {"path": ..., "depth": ...} or a bare path string."""
    if isinstance(item, str):
        return RepoRoot(path=item, max_depth=default_depth)
    if isinstance(item, (list, tuple)) and len(item) == 2 and isinstance(item[0], str):
        return RepoRoot(path=item[0], max_depth=_parse_depth(item[1], f"root {item[0]!r}"))
    if isinstance(item, dict) and isinstance(item.get("path"), str):
        depth = item.get("depth", default_depth)
        return RepoRoot(path=item["path"], max_depth=_parse_depth(depth, f"root {item['path']!r}"))
    raise ConfigError(f"bad root entry {item!r}; expected [path, depth]")


def parse_root_arg(arg: str) -> RepoRoot:
    """Parse a --root PATH[:DEPTH] command line value."""
    path, sep, depth = arg.rpartition(":")
    if sep and depth.isdigit() and path:
        return RepoRoot(path=path, max_depth=int(depth))
    return RepoRoot(path=arg, max_depth=0)


def parse_config(data: dict) -> Config:
    config = Config()

    default_depth = _parse_depth(data.get("default_depth", 0), "default_depth")
    roots = data.get("roots", [])
    if not isinstance(roots, list):
        raise ConfigError("roots must be a list")
    config.roots = [parse_root(item, default_depth) for item in roots]

    if "columns" in data:
        config.columns = build_columns(data["columns"])

    styles = data.get("styles", {})
    if not isinstance(styles, dict):
        raise ConfigError("styles must be an object mapping style names to column lists")
    config.styles.update(styles)

    if "cycle" in data:
        cycle = data["cycle"]
        if not isinstance(cycle, list) or not all(isinstance(s, str) for s in cycle):
            raise ConfigError("cycle must be a list of style names")
        missing = [s for s in cycle if s not in config.styles]
        if missing:
            raise ConfigError(f"cycle names unknown styles: {', '.join(missing)}")
        config.cycle = cycle

    sort_key = data.get("sort_key", config.sort_key)
    if not isinstance(sort_key, str):
        raise ConfigError("sort_key must be a column header")
    config.sort_key = sort_key
    sort_reverse = data.get("sort_reverse", False)
    if not isinstance(sort_reverse, bool):
        raise ConfigError(f"sort_reverse must be true or false, got {sort_reverse!r}")
    config.sort_reverse = sort_reverse
    return config


def load_config(explicit: Optional[str] = None) -> Config:
    path = config_path(explicit)
    return parse_config(load_config_data(path))
