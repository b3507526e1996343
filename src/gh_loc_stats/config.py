"""Run configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigurationError

DEFAULT_YEAR = 2025
DEFAULT_REPORTS_DIR = "./reports"
DEFAULT_MAX_REQUESTS_PER_HOUR = 4800


@dataclass(frozen=True)
class AnalysisConfig:
    token: str | None
    username: str | None
    year: int = DEFAULT_YEAR
    reports_dir: Path = Path(DEFAULT_REPORTS_DIR)
    max_requests_per_hour: int = DEFAULT_MAX_REQUESTS_PER_HOUR

    @property
    def since(self) -> str:
        return f"{self.year}-01-01T00:00:00Z"

    @property
    def until(self) -> str:
        return f"{self.year}-12-31T23:59:59Z"

    def validate(self) -> None:
        """Raise ConfigurationError if credentials are missing or values are out of range."""
        missing = []
        if not self.token:
            missing.append("GITHUB_TOKEN")
        if not self.username:
            missing.append("GITHUB_USERNAME")
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}",
                missing=missing,
            )
        if self.max_requests_per_hour <= 0:
            raise ConfigurationError("max_requests_per_hour must be positive")
