"""Rendering helpers — ordering rows and laying them out as a Rich table."""

from __future__ import annotations

from rich.table import Table

from repolist.columns import ColumnSpec
from repolist.summary import RepoRow
from repolist.theme import CYAN, SURFACE


def sort_rows(
    rows: list[RepoRow],
    columns: list[ColumnSpec],
    key: str,
    reverse: bool = False,
) -> list[RepoRow]:
    """Order rows by the plain text of the column headed `key`.

    Falls back to the display id when no column has that header.
    """
    headers = [c.header for c in columns]
    if key in headers:
        idx = headers.index(key)
        return sorted(rows, key=lambda r: (r.values[idx], r.id), reverse=reverse)
    return sorted(rows, key=lambda r: r.id, reverse=reverse)


def build_table(rows: list[RepoRow], columns: list[ColumnSpec], title: str | None = None) -> Table:
    table = Table(title=title, border_style=SURFACE, header_style=f"bold {CYAN}", show_edge=True, pad_edge=True)
    for col in columns:
        table.add_column(
            col.header,
            justify="right" if col.align_right else "left",
            max_width=col.width,
            no_wrap=True,
            overflow="ellipsis",
        )
    for row in rows:
        table.add_row(*row.cells)
    return table


def rows_as_dicts(rows: list[RepoRow], columns: list[ColumnSpec]) -> list[dict]:
    return [
        {
            "id": row.id,
            "path": row.path,
            "columns": {col.header: value for col, value in zip(columns, row.values)},
        }
        for row in rows
    ]
