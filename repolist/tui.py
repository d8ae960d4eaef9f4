"""Textual TUI — interactive repo table with style cycling and status view."""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Label, Static

from repolist.columns import ColumnSpec
from repolist.config import Config
from repolist.errors import RepolistError
from repolist.git import status_text
from repolist.render import sort_rows
from repolist.session import RepoListing
from repolist.summary import RepoRow


class RepoTable(DataTable):
    """Scrollable table of repos, one row per repo."""

    def update_data(self, rows: list[RepoRow], columns: list[ColumnSpec]) -> None:
        self.clear(columns=True)
        for col in columns:
            self.add_column(col.header, width=col.width)
        for row in rows:
            cells = []
            for col, cell in zip(columns, row.cells):
                if col.align_right:
                    cell = cell.copy()
                    cell.justify = "right"
                cells.append(cell)
            self.add_row(*cells, key=row.path)


class StatusScreen(Screen):
    """`git status` of one repo."""

    BINDINGS = [
        Binding("escape", "app.pop_screen", "Back"),
        Binding("q", "app.pop_screen", "Back"),
    ]

    def __init__(self, repo_id: str, path: str) -> None:
        super().__init__()
        self.repo_id = repo_id
        self.path = path

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll():
            yield Static(Text(f"{self.repo_id}  {self.path}", style="bold"), id="status-title")
            yield Static(Text(status_text(self.path) or "(no status)"), id="status-body")
        yield Footer()


class RepolistApp(App):
    """repolist — your repos at a glance."""

    CSS = """
    #repos {
        height: 1fr;
    }

    #loading {
        height: 100%;
        content-align: center middle;
        text-align: center;
    }

    #status-title {
        padding: 0 1;
        background: $boost;
    }

    #status-body {
        padding: 1 1;
    }
    """

    TITLE = "repolist"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("g", "refresh", "Refresh"),
        Binding("s", "cycle_style", "Next Style"),
        Binding("v", "status", "Status"),
    ]

    def __init__(self, config: Config, style: Optional[str] = None) -> None:
        super().__init__()
        self.config = config
        self.listing = RepoListing(config)
        self.initial_style = style
        self.rows_by_path: dict[str, RepoRow] = {}
        # True while a listing worker runs; refresh and cycle wait for it.
        self.busy = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield Label("  Scanning repos...", id="loading")
        yield RepoTable(id="repos", cursor_type="row", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(RepoTable).display = False
        if self.initial_style:
            self.start_listing("use_style", self.initial_style)
        else:
            self.start_listing("refresh")

    def action_refresh(self) -> None:
        self.start_listing("refresh")

    def action_cycle_style(self) -> None:
        self.start_listing("cycle_style")

    def start_listing(self, operation: str, *args: str) -> bool:
        """Start a listing operation unless one is still running."""
        if self.busy:
            self.notify("Still scanning repos, try again when it finishes", severity="warning")
            return False
        self.busy = True
        self.run_listing(operation, *args)
        return True

    @work(thread=True, exclusive=True)
    def run_listing(self, operation: str, *args: str) -> None:
        """Run a listing operation in a background thread."""
        try:
            rows = getattr(self.listing, operation)(*args)
        except RepolistError as exc:
            self.call_from_thread(self._show_error, str(exc))
            return
        self.call_from_thread(self._render_rows, rows, self.listing.columns, self.listing.style)

    def _show_error(self, message: str) -> None:
        self.busy = False
        self.notify(message, severity="error")
        if not self.listing.rows:
            self.query_one("#loading", Label).update(f"  {message}")

    def _render_rows(self, rows: list[RepoRow], columns: list[ColumnSpec], style: Optional[str]) -> None:
        self.busy = False
        self.sub_title = f"{len(rows)} repos · style: {style or 'default'}"
        loading = self.query_one("#loading", Label)
        table = self.query_one(RepoTable)
        if not rows:
            loading.update("  No git repos found under the configured roots.")
            loading.display = True
            table.display = False
            return

        rows = sort_rows(rows, columns, self.config.sort_key, self.config.sort_reverse)
        self.rows_by_path = {row.path: row for row in rows}
        loading.display = False
        table.display = True
        table.update_data(rows, columns)
        table.focus()

    def _selected_row(self) -> Optional[RepoRow]:
        table = self.query_one(RepoTable)
        if not table.display or table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return self.rows_by_path.get(row_key.value)

    def action_status(self) -> None:
        row = self._selected_row()
        try:
            path = self.listing.status_target(row)
        except RepolistError as exc:
            self.notify(str(exc), severity="warning")
            return
        self.push_screen(StatusScreen(row.id, path))

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self.action_status()


def run_tui(config: Config, style: Optional[str] = None) -> None:
    """Launch the repolist TUI."""
    app = RepolistApp(config, style=style)
    app.run()
