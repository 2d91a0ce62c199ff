"""Configuration constants for the PR Tracker."""

from pathlib import Path

API_URL = "https://api.github.com"
USER_AGENT = "pr-tracker"

# Hacktoberfest 2024 window (inclusive, GitHub search syntax)
EVENT_NAME = "Hacktoberfest"
WINDOW_START = "2024-09-30T00:00:00"
WINDOW_END = "2024-11-07T23:59:59"

# Input handling
DEBOUNCE_SECONDS = 0.5
REQUEST_TIMEOUT_SECONDS = 20

# Single user-facing error, whatever went wrong
ERROR_MESSAGE = "Error fetching data. Please try again."

# Persisted settings (one key: "theme")
SETTINGS_PATH = Path.home() / ".pr_tracker" / "settings.json"


def build_search_query(username: str) -> str:
    return f"author:{username} is:pr created:{WINDOW_START}..{WINDOW_END}"
