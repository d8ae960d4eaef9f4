"""CLI entry point for repolist."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from repolist import __version__
from repolist.config import Config, load_config, parse_root_arg
from repolist.errors import RepolistError, UserInputError
from repolist.session import RepoListing

log = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _listing(config: Config, style: str | None) -> RepoListing:
    listing = RepoListing(config)
    if style:
        listing.use_style(style)
    else:
        listing.refresh()
    return listing


def print_table(config: Config, *, style: str | None = None) -> None:
    """Print the repo table to stdout."""
    from rich.console import Console

    from repolist.render import build_table, sort_rows
    from repolist.theme import MUTED, YELLOW

    console = Console()
    listing = _listing(config, style)
    if not listing.rows:
        console.print(f"[{YELLOW}]No git repos found under the configured roots.[/{YELLOW}]")
        return

    rows = sort_rows(listing.rows, listing.columns, config.sort_key, config.sort_reverse)
    console.print(build_table(rows, listing.columns))
    label = listing.style or "default"
    console.print(f"  [{MUTED}]{len(rows)} repos · style: {label}[/{MUTED}]")


def print_json(config: Config, *, style: str | None = None) -> None:
    """Dump the repo table as JSON to stdout."""
    from repolist.render import rows_as_dicts, sort_rows

    listing = _listing(config, style)
    rows = sort_rows(listing.rows, listing.columns, config.sort_key, config.sort_reverse)
    data = {
        "style": listing.style,
        "columns": [c.header for c in listing.columns],
        "repos": rows_as_dicts(rows, listing.columns),
    }
    print(json.dumps(data, indent=2))


def print_status(config: Config, name: str | None) -> None:
    """Print `git status` for one repo, picked by display id or path."""
    from rich.console import Console
    from rich.markup import escape
    from rich.rule import Rule

    from repolist.git import is_repo, status_text
    from repolist.theme import CYAN

    if not name:
        raise UserInputError("status needs a repository name or directory")

    listing = RepoListing(config)
    if config.roots:
        listing.refresh()
    path = listing.resolve(name)
    if not is_repo(path):
        raise UserInputError(f"{path} is not a git repository")

    console = Console()
    console.print(Rule(f"[bold {CYAN}]{escape(path)}[/bold {CYAN}]", style=CYAN))
    console.print(status_text(path), highlight=False, markup=False)


def main() -> None:
    """Entry point for the repolist CLI."""
    parser = argparse.ArgumentParser(
        prog="repolist",
        description="List and summarize the git repositories under your project directories.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="list",
        choices=["list", "status", "tui"],
        help="list (default): print the table; status NAME: show git status; tui: interactive table",
    )
    parser.add_argument(
        "name",
        nargs="?",
        help="Repository display id or directory (for status)",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Config file (default: $REPOLIST_CONFIG or ~/.config/repolist/config.json)",
    )
    parser.add_argument(
        "--root",
        action="append",
        metavar="PATH[:DEPTH]",
        help="Directory to search, with optional depth (repeatable; overrides configured roots)",
    )
    parser.add_argument(
        "--style",
        metavar="NAME",
        help="Column style preset (simple, versioned, status, or one from the config)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output the table as JSON",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"repolist {__version__}",
    )

    args = parser.parse_args()
    _setup_logging(args.verbose)

    try:
        config = load_config(args.config)
        if args.root:
            config.roots = [parse_root_arg(r) for r in args.root]

        if args.command == "status":
            print_status(config, args.name)
        elif args.command == "tui":
            from repolist.tui import run_tui
            run_tui(config, style=args.style)
        elif args.json_output:
            print_json(config, style=args.style)
        else:
            print_table(config, style=args.style)
    except RepolistError as exc:
        from rich.console import Console
        from rich.text import Text

        from repolist.theme import RED

        Console(stderr=True).print(Text(str(exc), style=RED))
        sys.exit(1)


if __name__ == "__main__":
    main()
