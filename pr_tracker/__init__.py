"""Hacktoberfest PR Tracker.

Type a GitHub username and watch the pull requests that user opened during
Hacktoberfest 2024:
- Debounced, search-as-you-type username input
- Avatar and pull request lookup against the public GitHub API
- Progress message, result cards, loading spinner and error banner
- Light/dark theme persisted between sessions
"""

__version__ = "1.0.0"
