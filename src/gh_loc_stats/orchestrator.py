"""Run orchestration: client lifecycle, aggregation, rendering and saving."""

from __future__ import annotations

import time

from rich.console import Console

from .aggregator import calculate_loc
from .config import AnalysisConfig
from .github.client import GitHubClient
from .github.rate_limit import RequestThrottle
from .logging import get_logger
from .models import RunResult
from .renderer import ReportPaths, render_summary, save_results

logger = get_logger(__name__)


async def run(
    config: AnalysisConfig,
    target_repo: str | None = None,
    console: Console | None = None,
) -> tuple[RunResult, ReportPaths]:
    """Collect statistics, print the summary and write both report files."""
    config.validate()
    started = time.monotonic()
    logger.info(
        "Starting analysis",
        user=config.username,
        year=config.year,
        target=target_repo or "all repositories",
    )

    throttle = RequestThrottle(max_requests_per_hour=config.max_requests_per_hour)
    async with GitHubClient(token=config.token, throttle=throttle) as client:
        result = await calculate_loc(client, config, target_repo=target_repo)

    render_summary(result, console=console)
    paths = save_results(result, config.reports_dir, console=console)

    minutes = (time.monotonic() - started) / 60
    logger.info("Analysis completed", minutes=round(minutes, 1))
    return result, paths
