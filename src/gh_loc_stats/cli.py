"""Command-line entry point."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import (
    DEFAULT_MAX_REQUESTS_PER_HOUR,
    DEFAULT_REPORTS_DIR,
    DEFAULT_YEAR,
    AnalysisConfig,
)
from .exceptions import ConfigurationError, LocStatsError
from .github.client import GitHubAPIError
from .logging import configure_logging
from .orchestrator import run

_SETUP_HELP = """\
Please configure your GitHub credentials:

  export GITHUB_TOKEN=your_github_token_here
  export GITHUB_USERNAME=your_github_username

or pass --token and --username.

Get your GitHub token at: https://github.com/settings/tokens"""


@click.command()
@click.argument("target_repo", required=False)
@click.option("--token", envvar="GITHUB_TOKEN", help="GitHub token (or GITHUB_TOKEN env var).")
@click.option("--username", envvar="GITHUB_USERNAME", help="Account to analyze (or GITHUB_USERNAME env var).")
@click.option(
    "--year",
    envvar="ANALYSIS_YEAR",
    type=int,
    default=DEFAULT_YEAR,
    show_default=True,
    help="Calendar year to analyze (or ANALYSIS_YEAR env var).",
)
@click.option(
    "--reports-dir",
    envvar="REPORTS_DIR",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_REPORTS_DIR,
    show_default=True,
    help="Directory for the JSON report and text summary.",
)
@click.option(
    "--max-requests-per-hour",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_REQUESTS_PER_HOUR,
    show_default=True,
    help="Ceiling for the sustained API request rate.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default="console",
    show_default=True,
    help="Render log events for a terminal or as JSON lines.",
)
@click.version_option(version=__version__, prog_name="gh-loc-stats")
def main(
    target_repo: str | None,
    token: str | None,
    username: str | None,
    year: int,
    reports_dir: Path,
    max_requests_per_hour: int,
    log_level: str,
    log_format: str,
) -> None:
    """Count lines added and deleted by a GitHub user in one year.

    TARGET_REPO is a repository name or owner/name; without it every
    repository of the account is analyzed.
    """
    err = Console(stderr=True)
    config = AnalysisConfig(
        token=token,
        username=username,
        year=year,
        reports_dir=reports_dir,
        max_requests_per_hour=max_requests_per_hour,
    )
    try:
        config.validate()
    except ConfigurationError as exc:
        err.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        err.print(_SETUP_HELP, highlight=False, markup=False)
        sys.exit(1)

    configure_logging(log_level, json_output=log_format.lower() == "json")

    try:
        asyncio.run(run(config, target_repo=target_repo))
    except (LocStatsError, GitHubAPIError) as exc:
        err.print(f"[bold red]Error during analysis:[/bold red] {escape(str(exc))}")
        if isinstance(exc, GitHubAPIError) and exc.status == 403:
            err.print("This might be a rate limiting issue. Try again later or lower --max-requests-per-hour.")
        sys.exit(1)
    except Exception as exc:
        err.print(f"[bold red]Unexpected error during analysis:[/bold red] {escape(repr(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
