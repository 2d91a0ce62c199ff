from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class PullRequestSummary:
    id: int
    title: str
    html_url: str
    repository_url: str
    created_at: str

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "PullRequestSummary":
        """Build a summary from one ``items`` entry of the issue search API.

        Raises KeyError/TypeError/ValueError when the item is not shaped like
        a search result.
        """
        if not isinstance(item, dict):
            raise TypeError(f"Expected search item object, got {type(item).__name__}")
        created_at = str(item["created_at"])
        _parse_timestamp(created_at)
        return cls(
            id=int(item["id"]),
            title=str(item["title"]),
            html_url=str(item["html_url"]),
            repository_url=str(item["repository_url"]),
            created_at=created_at,
        )

    @property
    def repository(self) -> str:
        return self.repository_url.split("/")[-1]

    @property
    def created_date(self) -> date:
        return _parse_timestamp(self.created_at).astimezone().date()

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["repository"] = self.repository
        return payload


def _parse_timestamp(value: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from 3.11 on
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass
class TrackerState:
    """Everything the view needs; mutated only by the tracker."""

    username: str = ""
    pull_requests: list[PullRequestSummary] = field(default_factory=list)
    avatar_url: str = ""
    loading: bool = False
    error: str = ""
    show_error: bool = False

    @property
    def count(self) -> int:
        return len(self.pull_requests)


def format_created_date(value: date) -> str:
    """Render a date the way the viewer's locale writes dates."""
    return value.strftime("%x")
