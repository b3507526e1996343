"""Async GitHub REST client with request throttling."""

from __future__ import annotations

from typing import Any

import httpx

from .rate_limit import RequestThrottle

API_URL = "https://api.github.com"
PAGE_SIZE = 100
REQUEST_TIMEOUT = 30.0


class GitHubAPIError(Exception):
    """A GitHub request failed.

    ``status`` is the HTTP status code, or None for transport errors.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class GitHubClient:
    """Thin wrapper over the endpoints gh-loc-stats needs.

    Every request goes through the throttle first. Use as an async context
    manager so the underlying connection pool is closed.
    """

    def __init__(
        self,
        token: str,
        throttle: RequestThrottle | None = None,
        base_url: str = API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.throttle = throttle or RequestThrottle()
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=REQUEST_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def request_count(self) -> int:
        return self.throttle.request_count

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        await self.throttle.throttle()
        try:
            resp = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise GitHubAPIError(f"GET {path} failed: {exc}") from exc
        if resp.status_code >= 400:
            message = resp.reason_phrase
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("message"):
                message = body["message"]
            raise GitHubAPIError(
                f"GET {path} returned {resp.status_code}: {message}",
                status=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise GitHubAPIError(
                f"GET {path} returned an unreadable body: {exc}",
                status=resp.status_code,
            ) from exc

    async def list_repos(self, page: int = 1) -> list[dict[str, Any]]:
        """One page of repositories of the authenticated user, most recently updated first."""
        return await self._get(
            "/user/repos",
            params={
                "per_page": PAGE_SIZE,
                "page": page,
                "sort": "updated",
                "direction": "desc",
            },
        )

    async def list_commits(
        self,
        owner: str,
        repo: str,
        *,
        author: str | None = None,
        since: str | None = None,
        until: str | None = None,
        page: int = 1,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"per_page": PAGE_SIZE, "page": page}
        if author:
            params["author"] = author
        if since:
            params["since"] = since
        if until:
            params["until"] = until
        return await self._get(f"/repos/{owner}/{repo}/commits", params=params)

    async def get_commit(self, owner: str, repo: str, sha: str) -> dict[str, Any]:
        return await self._get(f"/repos/{owner}/{repo}/commits/{sha}")
