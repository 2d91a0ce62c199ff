"""Rich terminal rendering for the tracker view."""

from __future__ import annotations

from rich import box
from rich.columns import Columns
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.spinner import Spinner
from rich.style import Style
from rich.table import Table
from rich.text import Text

from .config import EVENT_NAME
from .models import PullRequestSummary, TrackerState, format_created_date
from .theme import Palette, ThemeSettings

console = Console()

CARD_WIDTH = 42
KEY_HINTS = "Enter search · Esc dismiss error · Ctrl+T theme · Ctrl+U clear · Ctrl+C quit"


def progress_message(count: int) -> str:
    if count <= 0:
        return "No pull requests made yet."
    if count <= 4:
        return f"{count} pull request{'s' if count > 1 else ''} made!"
    return f"{count} pull requests made! Awesome job!"


def no_results_message(username: str) -> str:
    return f"No pull requests found for {username} during {EVENT_NAME}."


def _link(label: str, url: str, style: str) -> Text:
    return Text(label, style=Style.parse(style) + Style(link=url))


def render_card(pr: PullRequestSummary, palette: Palette) -> Panel:
    body = Text()
    body.append_text(_link(pr.title, pr.html_url, palette.link))
    body.append("\n\n")
    body.append(f"Repository: {pr.repository}\n", style=palette.muted)
    body.append(f"Created at: {format_created_date(pr.created_date)}", style=palette.muted)
    return Panel(
        body,
        box=box.ROUNDED,
        width=CARD_WIDTH,
        style=palette.card,
        border_style=palette.card_border,
    )


def render_results(state: TrackerState, palette: Palette) -> RenderableType | None:
    if state.pull_requests:
        return Columns(
            [render_card(pr, palette) for pr in state.pull_requests],
            equal=True,
            expand=True,
        )
    if not state.loading and state.username:
        return Text(no_results_message(state.username), style="bold")
    return None


def render_error(state: TrackerState, palette: Palette) -> Panel | None:
    if not state.show_error:
        return None
    return Panel(
        Text(state.error),
        title="Error",
        subtitle="Esc to dismiss",
        box=box.HEAVY,
        style=palette.error,
    )


def render_view(state: TrackerState, settings: ThemeSettings, *, cursor: bool = True) -> Panel:
    """The whole screen: header, input, status, results."""
    palette = settings.palette
    parts: list[RenderableType] = [
        Text(f"{EVENT_NAME} Progress Tracker", style=palette.accent, justify="center"),
    ]

    if state.avatar_url:
        parts.append(_link("avatar", state.avatar_url, palette.link))

    entry = Text("GitHub username: ", style="bold")
    entry.append(state.username)
    if cursor:
        entry.append("▌", style="blink")
    parts.append(entry)
    parts.append(Text(KEY_HINTS, style=palette.muted))
    parts.append(Text(""))

    if state.loading:
        parts.append(Spinner("dots", text="Loading…"))

    banner = render_error(state, palette)
    if banner is not None:
        parts.append(banner)

    progress = Text("Progress: ", style="bold")
    progress.append(progress_message(state.count))
    parts.append(progress)
    parts.append(Text(""))

    results = render_results(state, palette)
    if results is not None:
        parts.append(results)

    title = Text("dark theme" if settings.dark else "light theme", style=palette.muted)
    return Panel(Group(*parts), title=title, box=box.DOUBLE, style=palette.root)


def render_results_table(pull_requests: list[PullRequestSummary], palette: Palette) -> Table:
    table = Table(box=box.ROUNDED, show_lines=False, border_style=palette.card_border)
    table.add_column("#", width=4, justify="right")
    table.add_column("Title", max_width=60)
    table.add_column("Repository", style="cyan", max_width=30)
    table.add_column("Created", justify="right")

    for i, pr in enumerate(pull_requests, 1):
        table.add_row(
            str(i),
            _link(pr.title, pr.html_url, palette.link),
            pr.repository,
            format_created_date(pr.created_date),
        )
    return table
