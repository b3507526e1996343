"""Per-repository processing and run-level aggregation."""

from __future__ import annotations

from datetime import datetime, timezone

from .classifier import file_extension, should_include_file
from .collector import fetch_commit_stats, fetch_commits
from .config import AnalysisConfig
from .exceptions import RepositoryNotFoundError
from .github.client import GitHubClient
from .logging import get_logger
from .models import (
    CommitStats,
    FileTypeStats,
    RepoOutcome,
    RepoStats,
    Repository,
    RunResult,
)
from .resolver import find_repository, list_all_repositories

logger = get_logger(__name__)

COMMIT_PROGRESS_INTERVAL = 50


def _count_commit(stats: CommitStats, repo_stats: RepoStats) -> None:
    """Add one commit's included lines to *repo_stats*."""
    if stats.truncated:
        repo_stats.truncated_commits += 1
    if stats.skipped:
        repo_stats.skipped_commits += 1

    if stats.files:
        for change in stats.files:
            if not should_include_file(change.filename):
                continue
            repo_stats.additions += change.additions
            repo_stats.deletions += change.deletions
            ext = repo_stats.file_types.setdefault(file_extension(change.filename), FileTypeStats())
            ext.additions += change.additions
            ext.deletions += change.deletions
            ext.files += 1
    elif stats.total > 0:
        # No per-file detail, fall back to the commit totals.
        repo_stats.additions += stats.additions
        repo_stats.deletions += stats.deletions

    repo_stats.commits += 1


async def process_repository(
    client: GitHubClient,
    repo: Repository,
    author: str,
    since: str,
    until: str,
) -> RepoOutcome:
    """Sum the author's included additions and deletions in *repo*.

    Any exception turns the whole repository into a failed outcome; partial
    sums are dropped.
    """
    log = logger.bind(repo=repo.full_name)
    try:
        log.info("Processing repository", size_mb=round(repo.size / 1024, 2))

        commits = await fetch_commits(client, repo.owner, repo.name, author, since, until)
        repo_stats = RepoStats(name=repo.full_name, size_kb=repo.size)
        if not commits:
            log.info("No commits found")
            return RepoOutcome(repository=repo, stats=repo_stats)

        log.info("Analyzing commits", commits=len(commits))
        for i, commit in enumerate(commits, 1):
            if i % COMMIT_PROGRESS_INTERVAL == 0:
                log.info("Processing commit", progress=f"{i}/{len(commits)}")
            stats = await fetch_commit_stats(client, repo.owner, repo.name, commit.sha)
            _count_commit(stats, repo_stats)

        if repo_stats.truncated_commits:
            log.warning("Commits had truncated file lists", truncated=repo_stats.truncated_commits)

        log.info(
            "Repository done",
            additions=repo_stats.additions,
            deletions=repo_stats.deletions,
            commits=repo_stats.commits,
        )
        return RepoOutcome(repository=repo, stats=repo_stats)
    except Exception as exc:
        log.error("Error processing repository", error=str(exc))
        return RepoOutcome(repository=repo, error=str(exc) or type(exc).__name__)


def merge_outcome(result: RunResult, outcome: RepoOutcome) -> None:
    """Fold one repository outcome into the run totals."""
    status = result.processing_status
    if not outcome.success:
        status.failed += 1
        status.failed_repos.append(outcome.repository.full_name)
        logger.error(
            "Failed to process repository",
            repo=outcome.repository.full_name,
            error=outcome.error,
        )
        return

    stats = outcome.stats
    status.successful += 1
    result.total_additions += stats.additions
    result.total_deletions += stats.deletions
    result.total_commits += stats.commits
    result.runtime_stats.truncated_commits += stats.truncated_commits
    result.runtime_stats.skipped_commits += stats.skipped_commits
    for ext, ext_stats in stats.file_types.items():
        result.file_type_stats.setdefault(ext, FileTypeStats()).merge(ext_stats)
    result.repo_stats.append(stats)


async def resolve_repositories(
    client: GitHubClient,
    config: AnalysisConfig,
    target_repo: str | None = None,
) -> list[Repository]:
    if target_repo:
        logger.info("Single repository mode", target=target_repo)
        repo = await find_repository(client, target_repo, config.username)
        if repo is None:
            raise RepositoryNotFoundError(target_repo)
        return [repo]
    logger.info("All repositories mode")
    return await list_all_repositories(client)


async def calculate_loc(
    client: GitHubClient,
    config: AnalysisConfig,
    target_repo: str | None = None,
) -> RunResult:
    """Compute the author's line statistics for ``config.year``.

    Repositories are processed one at a time in the order they were listed.
    """
    logger.info(
        "Calculating lines of code",
        year=config.year,
        since=config.since,
        until=config.until,
        max_requests_per_hour=config.max_requests_per_hour,
    )

    repos = await resolve_repositories(client, config, target_repo)
    result = RunResult(
        username=config.username,
        year=config.year,
        analysis_mode="single" if target_repo else "all",
        processed_at=datetime.now(timezone.utc).isoformat(),
    )

    total = len(repos)
    logger.info("Processing repositories", count=total)
    for i, repo in enumerate(repos, 1):
        logger.info("Repository", progress=f"{i / total * 100:.1f}%", index=f"{i}/{total}")
        outcome = await process_repository(client, repo, config.username, config.since, config.until)
        merge_outcome(result, outcome)

    if result.runtime_stats.truncated_commits:
        result.warnings.append(
            f"{result.runtime_stats.truncated_commits} commits had truncated data due to size"
        )
    if result.runtime_stats.skipped_commits:
        result.warnings.append(
            f"{result.runtime_stats.skipped_commits} commits could not be fetched and were counted as empty"
        )
    result.runtime_stats.total_api_calls = client.request_count

    logger.info(
        "Processing summary",
        mode=result.analysis_mode,
        repositories=total,
        successful=result.processing_status.successful,
        failed=result.processing_status.failed,
    )
    return result
