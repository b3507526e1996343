"""Exception hierarchy for gh-loc-stats."""

from __future__ import annotations


class LocStatsError(Exception):
    """Base class for errors that abort a run."""


class ConfigurationError(LocStatsError):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []


class RepositoryNotFoundError(LocStatsError):
    """The repository requested in single-repository mode does not exist."""

    def __init__(self, name: str):
        super().__init__(f"Repository '{name}' not found")
        self.name = name
