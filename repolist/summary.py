"""Row building — run every column against every repo."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rich.text import Text

from repolist.columns import ColumnSpec
from repolist.names import NamedRepo

log = logging.getLogger(__name__)


@dataclass
class RepoRow:
    id: str
    path: str
    values: list[str] = field(default_factory=list)
    cells: list[Text] = field(default_factory=list)

    def value(self, columns: list[ColumnSpec], header: str) -> str:
        """Plain value of the column with the given header."""
        for col, value in zip(columns, self.values):
            if col.header == header:
                return value
        raise KeyError(header)


def build_row(repo: NamedRepo, columns: list[ColumnSpec]) -> RepoRow:
    row = RepoRow(id=repo.id, path=repo.path)
    for col in columns:
        cell = col.compute(repo)
        if cell is None:
            cell = Text("")
        elif isinstance(cell, str):
            cell = Text(cell)
        row.cells.append(cell)
        row.values.append(cell.plain)
    return row


def build_rows(repos: list[NamedRepo], columns: list[ColumnSpec]) -> list[RepoRow]:
    """One row per repo, one value per column, in column order.

    Repos and columns are processed one at a time; rows are not sorted.
    """
    rows = [build_row(repo, columns) for repo in repos]
    log.debug("built %d rows x %d columns", len(rows), len(columns))
    return rows
