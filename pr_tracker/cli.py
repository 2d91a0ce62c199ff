from __future__ import annotations

import asyncio
import json
import locale
import logging
from pathlib import Path

import click
from rich.logging import RichHandler

from . import __version__
from .config import DEBOUNCE_SECONDS, ERROR_MESSAGE, REQUEST_TIMEOUT_SECONDS
from .display import console, no_results_message, progress_message, render_results_table
from .github_client import AsyncGitHubClient, GitHubApiError
from .interactive import InteractiveSession
from .models import PullRequestSummary
from .settings import SettingsStore, load_theme, save_theme
from .theme import Theme, ThemeSettings

log = logging.getLogger(__name__)


def _configure_locale() -> None:
    # Dates are shown in the viewer's own convention (%x).
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as exc:
        log.debug("Keeping default LC_TIME: %s", exc)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


async def _fetch_once(username: str, timeout: float) -> tuple[str, list[PullRequestSummary]]:
    async with AsyncGitHubClient(timeout=timeout) as client:
        avatar_url = await client.get_avatar_url(username)
        pull_requests = await client.search_pull_requests(username)
    return avatar_url, pull_requests


settings_option = click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file holding the persisted theme.",
)


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
@click.version_option(__version__, prog_name="pr-tracker")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Track a GitHub user's Hacktoberfest pull requests."""
    _configure_logging(verbose)
    _configure_locale()
    if ctx.invoked_subcommand is None:
        ctx.exit(InteractiveSession().run())


@main.command()
@click.argument("username", required=False, default="")
@click.option("--debounce", type=float, default=DEBOUNCE_SECONDS, show_default=True,
              help="Quiet period in seconds before a typed username is searched.")
@click.option("--timeout", type=float, default=REQUEST_TIMEOUT_SECONDS, show_default=True,
              help="Timeout per GitHub API call, in seconds.")
@settings_option
@click.pass_context
def watch(ctx: click.Context, username: str, debounce: float, timeout: float, settings_path: Path | None) -> None:
    """Search as you type (interactive)."""
    session = InteractiveSession(
        username=username,
        store=SettingsStore(settings_path),
        debounce_seconds=debounce,
        timeout=timeout,
    )
    ctx.exit(session.run())


@main.command()
@click.argument("username")
@click.option("--timeout", type=float, default=REQUEST_TIMEOUT_SECONDS, show_default=True,
              help="Timeout per GitHub API call, in seconds.")
@click.option("--json-out", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write the pull requests as JSON to this path.")
@settings_option
def show(username: str, timeout: float, json_out: Path | None, settings_path: Path | None) -> None:
    """Fetch USERNAME's pull requests once and print them."""
    theme = ThemeSettings.from_store(SettingsStore(settings_path))
    avatar_url, pull_requests = "", []
    if username:
        try:
            with console.status("Loading…"):
                avatar_url, pull_requests = asyncio.run(_fetch_once(username, timeout))
        except GitHubApiError as error:
            log.debug("Fetch failed: %s", error)
            console.print(f"[red]Error: {ERROR_MESSAGE}[/red]")
            raise SystemExit(1)
        console.print(f"[bold]Avatar:[/bold] {avatar_url}")

    console.print(f"[bold]Progress:[/bold] {progress_message(len(pull_requests))}")
    if pull_requests:
        console.print(render_results_table(pull_requests, theme.palette))
    elif username:
        console.print(no_results_message(username))

    if json_out:
        json_out.parent.mkdir(parents=True, exist_ok=True)
        json_out.write_text(
            json.dumps([pr.to_dict() for pr in pull_requests], indent=2),
            encoding="utf-8",
        )
        console.print(f"\nJSON report written to: [cyan]{json_out}[/cyan]")


@main.command()
@click.argument("value", required=False, type=click.Choice(["light", "dark", "toggle"]))
@settings_option
def theme(value: str | None, settings_path: Path | None) -> None:
    """Print or change the persisted theme."""
    store = SettingsStore(settings_path)
    if value is None:
        click.echo(load_theme(store).value)
        return
    if value == "toggle":
        current = ThemeSettings.from_store(store).toggle(store)
    else:
        current = Theme(value)
        save_theme(store, current)
    click.echo(current.value)


if __name__ == "__main__":
    main()
