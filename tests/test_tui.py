"""Tests for the textual TUI."""

import asyncio
import os
import threading

from repolist import session
from repolist.config import parse_config
from repolist.tui import RepolistApp, RepoTable


def _config(tmp):
    for rel in ("x/proj", "y/proj", "solo"):
        os.makedirs(os.path.join(tmp, rel, ".git"))
    return parse_config({
        "roots": [[str(tmp), 2]],
        "columns": [
            {"header": "Name", "width": 25, "kind": "ident"},
            {"header": "Path", "width": 99, "kind": "path"},
        ],
        "cycle": ["simple", "status"],
    })


def test_style_keys_ignored_while_listing_runs(tmp_path, monkeypatch):
    gate = threading.Event()
    real_build_rows = session.build_rows
    calls = []

    def slow_build_rows(repos, columns):
        calls.append(len(columns))
        if len(calls) == 1:
            gate.wait(timeout=10)
        return real_build_rows(repos, columns)

    monkeypatch.setattr(session, "build_rows", slow_build_rows)
    app = RepolistApp(_config(tmp_path))

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.press("s", "s")
            gate.set()
            await app.workers.wait_for_complete()
            await pilot.pause()

            listing = app.listing
            assert calls == [2]
            assert listing.style is None
            assert all(len(r.values) == len(listing.columns) for r in listing.rows)
            assert app.busy is False

            await pilot.press("s")
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert listing.style == "simple"
            assert all(len(r.values) == len(listing.columns) == 2 for r in listing.rows)

            await pilot.press("s")
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert listing.style == "status"
            assert all(len(r.values) == len(listing.columns) == 10 for r in listing.rows)
            table = app.query_one(RepoTable)
            assert table.row_count == 3
            assert len(table.columns) == 10

    asyncio.run(scenario())
