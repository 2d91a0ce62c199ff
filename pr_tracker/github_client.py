"""Async GitHub client for the two anonymous lookups the tracker needs.

Both calls are read-only GETs against the public REST API. No token is sent,
so the anonymous rate limit applies; a rate-limited response is just another
failed call.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any
from urllib.parse import quote as urlquote

import aiohttp

from .config import API_URL, REQUEST_TIMEOUT_SECONDS, USER_AGENT, build_search_query
from .models import PullRequestSummary

log = logging.getLogger(__name__)


class GitHubApiError(RuntimeError):
    pass


class AsyncGitHubClient:
    """Thin aiohttp wrapper: one lazily opened session, no retries."""

    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "AsyncGitHubClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            headers = {
                "Accept": "application/vnd.github+json",
                "User-Agent": USER_AGENT,
            }
            self._session = aiohttp.ClientSession(headers=headers)
        return self._session

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    async def _get_json(self, path: str, *, params: dict[str, str] | None = None) -> Any:
        session = await self._ensure_session()
        url = f"{self.base_url}{path}"
        log.debug("GET %s params=%s", url, params)
        try:
            async with session.get(
                url, params=params, timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as resp:
                body = await resp.read()
                if resp.status >= 400:
                    log.warning("GitHub API error %d for %s", resp.status, url)
                    snippet = body[:200].decode("utf-8", errors="replace")
                    raise GitHubApiError(f"GitHub API error {resp.status}: {snippet}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            log.warning("Request to %s failed: %s", url, exc)
            raise GitHubApiError(f"Request to {url} failed: {exc}") from exc
        try:
            return json.loads(body.decode("utf-8"))
        except ValueError as exc:
            # UnicodeDecodeError is a ValueError too
            raise GitHubApiError(f"Invalid JSON from {url}") from exc

    async def get_avatar_url(self, username: str) -> str:
        data = await self._get_json(f"/users/{urlquote(username, safe='')}")
        if not isinstance(data, dict) or not isinstance(data.get("avatar_url"), str):
            raise GitHubApiError(f"Unexpected profile payload for {username!r}")
        return data["avatar_url"]

    async def search_pull_requests(self, username: str) -> list[PullRequestSummary]:
        """Pull requests authored by ``username`` inside the event window, in API order."""
        data = await self._get_json("/search/issues", params={"q": build_search_query(username)})
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise GitHubApiError(f"Unexpected search payload for {username!r}")
        try:
            return [PullRequestSummary.from_api(item) for item in items]
        except (KeyError, TypeError, ValueError) as exc:
            raise GitHubApiError(f"Malformed search item: {exc}") from exc
