"""Tests for the debounced fetch cycle."""

import asyncio

import pytest

from pr_tracker.config import ERROR_MESSAGE
from pr_tracker.display import progress_message
from pr_tracker.models import PullRequestSummary, TrackerState
from pr_tracker.tracker import PullRequestTracker

DEBOUNCE = 0.05


def _run(coro):
    return asyncio.run(coro)


class TestDebouncedInput:
    def test_rapid_typing_triggers_one_fetch_with_final_value(self, source_factory, item_factory):
        source = source_factory(results={"oct": [item_factory(1)]})

        async def scenario():
            tracker = PullRequestTracker(source, debounce_seconds=DEBOUNCE)
            for text in ("o", "oc", "oct"):
                tracker.on_input(text)
                await asyncio.sleep(DEBOUNCE / 5)
            assert tracker.debounce_pending
            assert source.search_calls == []
            await asyncio.sleep(DEBOUNCE * 4)
            await tracker.aclose()
            return tracker.state

        state = _run(scenario())
        assert source.avatar_calls == ["oct"]
        assert source.search_calls == ["oct"]
        assert state.count == 1

    def test_pauses_longer_than_debounce_fetch_each_value(self, source_factory):
        source = source_factory()

        async def scenario():
            tracker = PullRequestTracker(source, debounce_seconds=DEBOUNCE)
            tracker.on_input("oc")
            await asyncio.sleep(DEBOUNCE * 4)
            tracker.on_input("oct")
            await asyncio.sleep(DEBOUNCE * 4)
            await tracker.aclose()

        _run(scenario())
        assert source.search_calls == ["oc", "oct"]

    def test_clearing_input_empties_results_without_request(self, source_factory, item_factory):
        source = source_factory()
        state = TrackerState(
            username="octocat",
            pull_requests=[PullRequestSummary.from_api(item_factory(1))],
            avatar_url="https://avatars.githubusercontent.com/octocat",
        )

        async def scenario():
            tracker = PullRequestTracker(source, state=state, debounce_seconds=DEBOUNCE)
            tracker.on_input("octocatx")
            tracker.on_input("")
            assert not tracker.debounce_pending
            assert tracker.state.pull_requests == []
            assert tracker.state.avatar_url == ""
            await asyncio.sleep(DEBOUNCE * 4)
            await tracker.aclose()

        _run(scenario())
        assert source.avatar_calls == []
        assert source.search_calls == []
        assert progress_message(state.count) == "No pull requests made yet."

    def test_search_now_bypasses_debounce(self, source_factory):
        source = source_factory()

        async def scenario():
            tracker = PullRequestTracker(source, debounce_seconds=10)
            tracker.on_input("octocat")
            assert tracker.debounce_pending
            await tracker.search_now()
            assert not tracker.debounce_pending
            await tracker.aclose()

        _run(scenario())
        assert source.search_calls == ["octocat"]

    def test_on_change_fires_for_every_edit(self, source_factory):
        seen = []

        async def scenario():
            tracker = PullRequestTracker(
                source_factory(), debounce_seconds=10, on_change=lambda s: seen.append(s.username)
            )
            tracker.on_input("a")
            tracker.on_input("ab")
            await tracker.aclose()

        _run(scenario())
        assert seen == ["a", "ab"]


class TestFetchCycle:
    def test_octocat_with_three_results(self, source_factory, item_factory):
        source = source_factory(results={"octocat": [item_factory(n) for n in (3, 1, 2)]})

        async def scenario():
            tracker = PullRequestTracker(source)
            source.tracker = tracker
            tracker.state.username = "octocat"
            await tracker.fetch()
            return tracker.state

        state = _run(scenario())
        assert progress_message(state.count) == "3 pull requests made!"
        assert state.avatar_url == "https://avatars.githubusercontent.com/octocat"
        # API order, not re-sorted
        assert [pr.id for pr in state.pull_requests] == [1003, 1001, 1002]
        assert source.loading_seen == [True]
        assert state.loading is False
        assert state.show_error is False

    def test_empty_username_issues_no_request(self, source_factory):
        source = source_factory()

        async def scenario():
            tracker = PullRequestTracker(source)
            await tracker.search_now()
            return tracker.state

        state = _run(scenario())
        assert source.avatar_calls == []
        assert source.search_calls == []
        assert progress_message(state.count) == "No pull requests made yet."

    def test_failed_search_keeps_previous_results(self, source_factory, item_factory):
        previous = [PullRequestSummary.from_api(item_factory(1))]
        source = source_factory(fail_search=True)

        async def scenario():
            tracker = PullRequestTracker(
                source, state=TrackerState(username="octocat", pull_requests=list(previous))
            )
            await tracker.fetch()
            return tracker

        tracker = _run(scenario())
        assert tracker.state.pull_requests == previous
        assert tracker.state.show_error is True
        assert tracker.state.error == ERROR_MESSAGE
        assert tracker.state.loading is False

        tracker.dismiss_error()
        assert tracker.state.show_error is False
        assert tracker.state.error == ERROR_MESSAGE

    def test_failed_avatar_skips_search(self, source_factory):
        source = source_factory(fail_avatar=True)

        async def scenario():
            tracker = PullRequestTracker(source, state=TrackerState(username="ghost"))
            await tracker.fetch()
            return tracker.state

        state = _run(scenario())
        assert source.avatar_calls == ["ghost"]
        assert source.search_calls == []
        assert state.show_error is True
        assert state.avatar_url == ""

    def test_new_fetch_clears_error_text(self, source_factory):
        source = source_factory(fail_search=True)

        async def scenario():
            tracker = PullRequestTracker(source, state=TrackerState(username="octocat"))
            await tracker.fetch()
            source.fail_search = False
            await tracker.fetch()
            return tracker.state

        state = _run(scenario())
        assert state.error == ""
        # Dismissal is manual only.
        assert state.show_error is True

    def test_stale_response_is_discarded(self, source_factory, item_factory):
        source = source_factory(
            results={"slow": [item_factory(1)], "fast": [item_factory(2), item_factory(3)]},
            delays={"slow": 0.1},
        )

        async def scenario():
            tracker = PullRequestTracker(source, debounce_seconds=10)
            tracker.on_input("slow")
            slow = tracker.search_now()
            await asyncio.sleep(0.01)
            tracker.on_input("fast")
            fast = tracker.search_now()
            await asyncio.gather(slow, fast)
            return tracker.state

        state = _run(scenario())
        assert [pr.id for pr in state.pull_requests] == [1002, 1003]
        assert state.avatar_url.endswith("/fast")
        assert state.loading is False
        # The slow profile lookup resolved after it was superseded, so its search never ran.
        assert source.search_calls == ["fast"]

    def test_clearing_discards_in_flight_fetch(self, source_factory, item_factory):
        source = source_factory(results={"octocat": [item_factory(1)]}, delays={"octocat": 0.05})

        async def scenario():
            tracker = PullRequestTracker(source, debounce_seconds=10)
            tracker.on_input("octocat")
            task = tracker.search_now()
            await asyncio.sleep(0.01)
            tracker.on_input("")
            await task
            return tracker.state

        state = _run(scenario())
        assert state.pull_requests == []
        assert state.avatar_url == ""
        assert state.loading is False


@pytest.mark.parametrize(
    "count, expected",
    [
        (0, "No pull requests made yet."),
        (1, "1 pull request made!"),
        (2, "2 pull requests made!"),
        (4, "4 pull requests made!"),
        (5, "5 pull requests made! Awesome job!"),
        (12, "12 pull requests made! Awesome job!"),
    ],
)
def test_progress_message_tiers(count, expected):
    assert progress_message(count) == expected
