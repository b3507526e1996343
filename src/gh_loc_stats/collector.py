"""Commit listing and per-commit statistics."""

from __future__ import annotations

from .github.client import GitHubAPIError, GitHubClient
from .github.retry import RetryPolicy
from .logging import get_logger
from .models import LARGE_CHANGE_TOTAL, LARGE_FILE_LIST, Commit, CommitStats

logger = get_logger(__name__)

MAX_COMMITS_PER_REPO = 5000
NON_RETRYABLE_STATUSES = frozenset({404, 409})


def is_retryable(exc: BaseException) -> bool:
    """404 and 409 mean the commit is gone or has no usable diff."""
    return not (isinstance(exc, GitHubAPIError) and exc.status in NON_RETRYABLE_STATUSES)


STATS_RETRY_POLICY = RetryPolicy(max_attempts=3, is_retryable=is_retryable)
# A failed listing page ends pagination instead of being retried.
PAGE_POLICY = RetryPolicy(max_attempts=1)


async def fetch_commits(
    client: GitHubClient,
    owner: str,
    repo: str,
    author: str,
    since: str,
    until: str,
    max_commits: int = MAX_COMMITS_PER_REPO,
    policy: RetryPolicy = PAGE_POLICY,
) -> list[Commit]:
    """Page through *author*'s commits in ``[since, until]``.

    Stops at an empty page or once *max_commits* have been collected. A page
    error ends pagination and the commits collected so far are returned.
    """
    commits: list[Commit] = []
    page = 1
    logger.debug("Fetching commits", repo=f"{owner}/{repo}")

    while len(commits) < max_commits:
        try:
            data = await policy.call(
                lambda: client.list_commits(
                    owner, repo, author=author, since=since, until=until, page=page
                ),
                label=f"{owner}/{repo} commits page {page}",
            )
            batch = [Commit.from_api(item) for item in data or []]
        except Exception as exc:
            logger.warning(
                "Error fetching commits, keeping partial results",
                repo=f"{owner}/{repo}",
                page=page,
                collected=len(commits),
                error=str(exc),
            )
            break

        if not batch:
            break

        commits.extend(batch)
        page += 1

        if len(commits) % 500 == 0:
            logger.info("Fetched commits so far", repo=repo, count=len(commits))

    if len(commits) >= max_commits:
        logger.warning(
            "Commit limit reached",
            repo=f"{owner}/{repo}",
            limit=max_commits,
        )
        commits = commits[:max_commits]

    return commits


async def fetch_commit_stats(
    client: GitHubClient,
    owner: str,
    repo: str,
    sha: str,
    policy: RetryPolicy = STATS_RETRY_POLICY,
) -> CommitStats:
    """Fetch additions, deletions and the file list of one commit.

    Failures never propagate: unreachable commits (404/409) and commits that
    still fail after the policy's retries yield zero-valued, skipped stats.
    """
    short = sha[:8]
    try:
        data = await policy.call(
            lambda: client.get_commit(owner, repo, sha),
            label=f"{owner}/{repo}@{short}",
        )
        stats = CommitStats.from_api(data)
    except Exception as exc:
        status = getattr(exc, "status", None)
        if status in NON_RETRYABLE_STATUSES:
            logger.warning("Skipping commit", sha=short, status=status, error=str(exc))
        else:
            logger.error(
                "Failed to fetch commit",
                sha=short,
                attempts=policy.max_attempts,
                error=str(exc),
            )
        return CommitStats.empty(skipped=True)

    if len(stats.files) >= LARGE_FILE_LIST:
        logger.warning("Commit file list may be truncated", sha=short, files=len(stats.files))
    if stats.total > LARGE_CHANGE_TOTAL:
        logger.warning("Large commit", sha=short, total_changes=stats.total)
    return stats
