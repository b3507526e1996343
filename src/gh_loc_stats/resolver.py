"""Repository discovery for the authenticated account."""

from __future__ import annotations

from .github.client import GitHubClient
from .github.retry import RetryPolicy
from .logging import get_logger
from .models import Repository

logger = get_logger(__name__)

MAX_PAGES = 1000
PAGE_POLICY = RetryPolicy(max_attempts=1)


async def list_all_repositories(
    client: GitHubClient,
    max_pages: int = MAX_PAGES,
    policy: RetryPolicy = PAGE_POLICY,
) -> list[Repository]:
    """All repositories of the account, in the order GitHub lists them.

    A page error stops pagination; what has been collected is returned.
    """
    logger.info("Fetching all repositories")
    repos: list[Repository] = []
    page = 1

    while True:
        try:
            data = await policy.call(lambda: client.list_repos(page=page), label=f"repos page {page}")
            batch = [Repository.from_api(item) for item in data or []]
        except Exception as exc:
            logger.error("Error fetching repositories", page=page, error=str(exc))
            break

        if not batch:
            break

        repos.extend(batch)
        page += 1
        logger.info("Fetched repositories so far", count=len(repos))

        if page > max_pages:
            logger.warning("Stopped paging repositories", max_pages=max_pages)
            break

    logger.info("Found repositories", total=len(repos))
    return repos


def match_repository(repos: list[Repository], query: str, username: str) -> Repository | None:
    """First repository whose name, full name or ``username/name`` equals *query*."""
    qualified = f"{username}/{query}"
    for repo in repos:
        if repo.name == query or repo.full_name == query or repo.full_name == qualified:
            return repo
    return None


async def find_repository(client: GitHubClient, query: str, username: str) -> Repository | None:
    logger.info("Searching for repository", query=query)
    repo = match_repository(await list_all_repositories(client), query, username)
    if repo:
        logger.info("Found repository", repo=repo.full_name)
    else:
        logger.warning("Repository not found", query=query)
    return repo
