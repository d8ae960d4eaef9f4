"""Exceptions raised by repolist."""

from __future__ import annotations


class RepolistError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(RepolistError):
    """Configuration could not be parsed or validated."""


class UserInputError(RepolistError):
    """The user asked for something that cannot be done (no selection, bad name)."""


class NoRepositoriesError(RepolistError):
    """No repository roots are configured."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "No repository roots configured. Add \"roots\" to your config "
            "file or pass --root PATH[:DEPTH]."
        )
