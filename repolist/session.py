"""A repo listing session — the state behind one table of repos."""

from __future__ import annotations

import logging
import os
from typing import Optional

from repolist.columns import ColumnSpec
from repolist.config import Config
from repolist.errors import NoRepositoriesError, UserInputError
from repolist.names import NamedRepo, name_repos
from repolist.scanner import find_repos
from repolist.styles import StyleCycler, StylePreset
from repolist.summary import RepoRow, build_rows

log = logging.getLogger(__name__)


class RepoListing:
    """Columns, rows and the active style of one listing.

    ``style`` starts out as None, meaning the configured default columns
    are shown. Only cycle_style() and use_style() change it.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.cycler = StyleCycler(config.styles, config.cycle)
        self.style: Optional[str] = None
        self.columns: list[ColumnSpec] = list(config.columns)
        self.repos: list[NamedRepo] = []
        self.rows: list[RepoRow] = []

    def _rebuild(self, columns: list[ColumnSpec]) -> tuple[list[NamedRepo], list[RepoRow]]:
        if not self.config.roots:
            raise NoRepositoriesError()
        repos = name_repos(find_repos(self.config.roots))
        rows = build_rows(repos, columns)
        log.debug("listing has %d repos", len(rows))
        return repos, rows

    def refresh(self) -> list[RepoRow]:
        """Rescan the roots and rebuild every row from scratch."""
        self.repos, self.rows = self._rebuild(self.columns)
        return self.rows

    def _activate(self, preset: StylePreset) -> list[RepoRow]:
        # Rows are built before anything is assigned, so style, columns
        # and rows always change together.
        repos, rows = self._rebuild(preset.columns)
        self.style, self.columns, self.repos, self.rows = preset.name, preset.columns, repos, rows
        return rows

    def use_style(self, name: str) -> list[RepoRow]:
        return self._activate(self.cycler.preset(name))

    def cycle_style(self) -> list[RepoRow]:
        """Switch to the next style in the cycle and refresh.

        A ConfigError from the next style's columns propagates and leaves
        the current style and columns in place.
        """
        return self._activate(self.cycler.next(self.style))

    def repo_map(self) -> dict[str, str]:
        return {repo.id: repo.path for repo in self.repos}

    def status_target(self, row: Optional[RepoRow]) -> str:
        if row is None:
            raise UserInputError("No repository selected")
        return row.path

    def resolve(self, choice: str) -> str:
        """Map a display id to its path, or accept an existing directory."""
        return resolve_choice(choice, self.repo_map())


def resolve_choice(choice: str, repos: dict[str, str]) -> str:
    if choice in repos:
        return repos[choice]
    path = os.path.abspath(os.path.expanduser(choice))
    if os.path.isdir(path):
        return path
    raise UserInputError(f"{choice!r} is neither a known repository nor a directory")
