"""Shared visual constants for repolist."""

from __future__ import annotations

from rich.style import Style

# ── Color Palette (GitHub Dark) ─────────────────────────────────────────

SURFACE = "#161b22"
MUTED = "#8b949e"

CYAN = "#58a6ff"
YELLOW = "#e3b341"
RED = "#f85149"

# ── Cell Styles ─────────────────────────────────────────────────────────

EMPHASIS = Style(bold=True)
DIRTY = Style(color=RED, bold=True)
FLAG = Style(color=YELLOW, bold=True)
IDENT = Style(color=CYAN, bold=True)
PATH = Style(color=MUTED)
