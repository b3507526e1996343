"""Tests for repository discovery."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from gh_loc_stats.github.client import GitHubAPIError, GitHubClient
from gh_loc_stats.github.rate_limit import RequestThrottle
from gh_loc_stats.models import Repository
from gh_loc_stats.resolver import find_repository, list_all_repositories, match_repository


def _repo_payload(name: str, owner: str = "test-user", size: int = 1024) -> dict:
    return {
        "id": hash(name) % 1000,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": {"login": owner},
        "size": size,
    }


@pytest.fixture
def client():
    client = AsyncMock(spec=GitHubClient)
    client.list_repos.side_effect = [
        [_repo_payload("repo1"), _repo_payload("repo2")],
        [_repo_payload("shared", owner="other-org")],
        [],
    ]
    return client


@pytest.mark.asyncio
async def test_list_all_repositories(client):
    repos = await list_all_repositories(client)
    assert [r.full_name for r in repos] == ["test-user/repo1", "test-user/repo2", "other-org/shared"]
    assert repos[2].owner == "other-org"
    assert repos[0].size == 1024
    assert client.list_repos.await_count == 3


@pytest.mark.asyncio
async def test_list_all_repositories_page_cap():
    client = AsyncMock(spec=GitHubClient)
    client.list_repos.return_value = [_repo_payload("again")]
    repos = await list_all_repositories(client, max_pages=5)
    assert len(repos) == 5
    assert client.list_repos.await_count == 5


@pytest.mark.asyncio
async def test_list_all_repositories_stops_on_error():
    client = AsyncMock(spec=GitHubClient)
    client.list_repos.side_effect = [
        [_repo_payload("repo1")],
        GitHubAPIError("server error", status=500),
    ]
    repos = await list_all_repositories(client)
    assert [r.name for r in repos] == ["repo1"]


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["repo1", "test-user/repo1"])
async def test_find_repository_by_name_or_full_name(client, query):
    repo = await find_repository(client, query, "test-user")
    assert repo is not None
    assert repo.full_name == "test-user/repo1"


@pytest.mark.asyncio
async def test_find_repository_other_owner_full_name(client):
    repo = await find_repository(client, "other-org/shared", "test-user")
    assert repo.owner == "other-org"


@pytest.mark.asyncio
async def test_find_repository_missing(client):
    assert await find_repository(client, "nope", "test-user") is None


def test_match_repository_first_match_wins():
    repos = [
        Repository(id=1, owner="org", name="tools", full_name="org/tools"),
        Repository(id=2, owner="test-user", name="tools", full_name="test-user/tools"),
    ]
    assert match_repository(repos, "tools", "test-user").id == 1
    assert match_repository(repos, "test-user/tools", "test-user").id == 2


@pytest.mark.asyncio
async def test_list_all_repositories_unreadable_page_keeps_partial_results():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["page"] == "1":
            return httpx.Response(200, json=[_repo_payload("repo1")])
        return httpx.Response(200, content=b"garbled")

    client = GitHubClient(
        token="fake-token",
        throttle=RequestThrottle(sleep=AsyncMock()),
        transport=httpx.MockTransport(handler),
    )
    async with client:
        repos = await list_all_repositories(client)

    assert [r.full_name for r in repos] == ["test-user/repo1"]


@pytest.mark.asyncio
async def test_list_all_repositories_malformed_entry_stops_paging():
    client = AsyncMock(spec=GitHubClient)
    client.list_repos.side_effect = [
        [_repo_payload("repo1")],
        [{"id": 7}],
    ]
    repos = await list_all_repositories(client)
    assert [r.name for r in repos] == ["repo1"]
