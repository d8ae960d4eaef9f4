"""repolist — list and summarize many git working trees at once."""

__version__ = "0.1.0"
