from __future__ import annotations

import asyncio

import pytest

from pr_tracker.github_client import GitHubApiError
from pr_tracker.models import PullRequestSummary


def make_item(number: int, repo: str = "hello-world") -> dict:
    return {
        "id": 1000 + number,
        "title": f"Fix bug #{number}",
        "html_url": f"https://github.com/octo-org/{repo}/pull/{number}",
        "repository_url": f"https://api.github.com/repos/octo-org/{repo}",
        "created_at": "2024-10-0%dT12:00:00Z" % (number % 9 + 1),
    }


class FakePullRequestSource:
    """In-memory stand-in for AsyncGitHubClient that records every call."""

    def __init__(self, results=None, delays=None, fail_avatar=False, fail_search=False):
        self.results = results or {}
        self.delays = delays or {}
        self.fail_avatar = fail_avatar
        self.fail_search = fail_search
        self.avatar_calls: list[str] = []
        self.search_calls: list[str] = []
        self.loading_seen: list[bool] = []
        self.tracker = None

    async def get_avatar_url(self, username: str) -> str:
        self.avatar_calls.append(username)
        await asyncio.sleep(self.delays.get(username, 0))
        if self.fail_avatar:
            raise GitHubApiError("profile lookup failed")
        return f"https://avatars.githubusercontent.com/{username}"

    async def search_pull_requests(self, username: str) -> list[PullRequestSummary]:
        self.search_calls.append(username)
        if self.tracker is not None:
            self.loading_seen.append(self.tracker.state.loading)
        if self.fail_search:
            raise GitHubApiError("search failed")
        return [PullRequestSummary.from_api(item) for item in self.results.get(username, [])]


@pytest.fixture
def source_factory():
    return FakePullRequestSource


@pytest.fixture
def item_factory():
    return make_item
