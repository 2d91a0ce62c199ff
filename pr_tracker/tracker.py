"""Search-as-you-type controller: debounced input plus the fetch cycle.

The tracker is the single writer of ``TrackerState``. Views subscribe through
``on_change`` and re-render from the state they are handed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

from .config import DEBOUNCE_SECONDS, ERROR_MESSAGE
from .debounce import Debouncer
from .github_client import GitHubApiError
from .models import PullRequestSummary, TrackerState

log = logging.getLogger(__name__)


class PullRequestSource(Protocol):
    async def get_avatar_url(self, username: str) -> str: ...

    async def search_pull_requests(self, username: str) -> list[PullRequestSummary]: ...


class PullRequestTracker:
    def __init__(
        self,
        client: PullRequestSource,
        state: TrackerState | None = None,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        on_change: Callable[[TrackerState], None] | None = None,
    ):
        self.client = client
        self.state = state or TrackerState()
        self.on_change = on_change
        self._debouncer = Debouncer(debounce_seconds)
        self._tasks: set[asyncio.Task] = set()
        # Bumped on every fetch and every clear; only the latest may write results.
        self._generation = 0

    # ── Input ───────────────────────────────────────────────────

    def on_input(self, text: str) -> None:
        """Record a new username and restart the debounce timer."""
        self.state.username = text
        if not text:
            self._debouncer.cancel()
            self._clear_results()
            return
        self._notify()
        self._debouncer.schedule(self._spawn_fetch)

    def search_now(self) -> asyncio.Task:
        """Search immediately with the recorded username, skipping the debounce."""
        self._debouncer.cancel()
        return self._spawn_fetch()

    def dismiss_error(self) -> None:
        self.state.show_error = False
        self._notify()

    @property
    def debounce_pending(self) -> bool:
        return self._debouncer.pending

    # ── Fetch cycle ─────────────────────────────────────────────

    async def fetch(self) -> None:
        username = self.state.username
        if not username:
            self._clear_results()
            return

        self._generation += 1
        generation = self._generation
        log.debug("Fetch #%d for %r", generation, username)

        self.state.loading = True
        self.state.error = ""
        self._notify()

        try:
            avatar_url = await self.client.get_avatar_url(username)
            if not self._is_current(generation):
                log.debug("Discarding stale fetch #%d", generation)
                return
            self.state.avatar_url = avatar_url
            self._notify()

            pull_requests = await self.client.search_pull_requests(username)
            if not self._is_current(generation):
                log.debug("Discarding stale fetch #%d", generation)
                return
            self.state.pull_requests = pull_requests
            log.debug("Fetch #%d found %d pull requests", generation, len(pull_requests))
        except GitHubApiError as exc:
            if not self._is_current(generation):
                return
            log.debug("Fetch #%d failed: %s", generation, exc)
            self.state.error = ERROR_MESSAGE
            self.state.show_error = True
        finally:
            if self._is_current(generation):
                self.state.loading = False
                self._notify()

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _spawn_fetch(self) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self.fetch())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _clear_results(self) -> None:
        self._generation += 1
        self.state.pull_requests = []
        self.state.avatar_url = ""
        self.state.loading = False
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.state)

    async def aclose(self) -> None:
        self._debouncer.cancel()
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
