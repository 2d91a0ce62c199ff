"""Interactive full-screen tracker: search-as-you-type in the terminal."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys
import termios
import tty

from rich.live import Live

from .config import DEBOUNCE_SECONDS, REQUEST_TIMEOUT_SECONDS
from .display import console, render_view
from .github_client import AsyncGitHubClient
from .models import TrackerState
from .settings import SettingsStore
from .theme import ThemeSettings
from .tracker import PullRequestTracker

log = logging.getLogger(__name__)

ENTER = ("\r", "\n")
ESC = "\x1b"
BACKSPACE = ("\x7f", "\x08")
CTRL_D = "\x04"
CTRL_T = "\x14"
CTRL_U = "\x15"


class _CbreakTerminal:
    """Context manager that puts stdin into cbreak mode and restores it on exit.

    cbreak gives single key-presses while still letting Ctrl+C raise SIGINT.
    """

    def __init__(self, fd: int):
        self.fd = fd
        self._old_settings = None

    def __enter__(self):
        try:
            self._old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            self._old_settings = None
        return self

    def __exit__(self, *exc):
        if self._old_settings is not None:
            try:
                termios.tcsetattr(self.fd, termios.TCSADRAIN, self._old_settings)
            except termios.error:
                pass
        self._old_settings = None


class InteractiveSession:
    """Stateful interactive session: one input box, one result view."""

    def __init__(
        self,
        username: str = "",
        store: SettingsStore | None = None,
        client: AsyncGitHubClient | None = None,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.store = store or SettingsStore()
        # Read once; afterwards only written on toggle.
        self.theme = ThemeSettings.from_store(self.store)
        self.client = client or AsyncGitHubClient(timeout=timeout)
        self.tracker = PullRequestTracker(
            self.client,
            state=TrackerState(),
            debounce_seconds=debounce_seconds,
            on_change=self._on_change,
        )
        self._initial_username = username
        self._live: Live | None = None
        self._done: asyncio.Event | None = None

    @property
    def state(self) -> TrackerState:
        return self.tracker.state

    # ── Main loop ───────────────────────────────────────────────

    def run(self) -> int:
        if not sys.stdin.isatty():
            console.print("[red]Interactive mode needs a terminal.[/red] Use [bold]pr-tracker show USERNAME[/bold].")
            return 2
        try:
            asyncio.run(self._run())
        except KeyboardInterrupt:
            pass
        console.print("[dim]Goodbye![/dim]")
        return 0

    async def _run(self):
        loop = asyncio.get_running_loop()
        self._done = asyncio.Event()
        fd = sys.stdin.fileno()

        with _CbreakTerminal(fd), Live(
            self._render(), console=console, screen=True, refresh_per_second=12,
        ) as live:
            self._live = live
            loop.add_reader(fd, self._on_stdin, fd)
            loop.add_signal_handler(signal.SIGINT, self._done.set)
            try:
                if self._initial_username:
                    self.tracker.on_input(self._initial_username)
                    self.tracker.search_now()
                await self._done.wait()
            finally:
                loop.remove_signal_handler(signal.SIGINT)
                loop.remove_reader(fd)
                self._live = None
                await self.tracker.aclose()
                await self.client.close()

    # ── Input ───────────────────────────────────────────────────

    def _on_stdin(self, fd: int):
        try:
            data = os.read(fd, 64)
        except OSError as exc:
            log.warning("Reading stdin failed: %s", exc)
            self._quit()
            return
        if not data:
            self._quit()
            return
        text = data.decode("utf-8", errors="ignore")
        # Arrow keys and friends arrive as ESC-prefixed sequences; only a bare ESC dismisses.
        if text.startswith(ESC) and len(text) > 1:
            return
        for ch in text:
            if not self.handle_key(ch):
                self._quit()
                return

    def handle_key(self, ch: str) -> bool:
        """Apply one key-press. Returns False when the session should end."""
        if ch == CTRL_D:
            return False
        if ch in ENTER:
            self.tracker.search_now()
        elif ch == ESC:
            self.tracker.dismiss_error()
        elif ch == CTRL_T:
            try:
                self.theme.toggle(self.store)
            except OSError as exc:
                log.warning("Could not save theme to %s: %s", self.store.path, exc)
            self._refresh()
        elif ch == CTRL_U:
            self.tracker.on_input("")
        elif ch in BACKSPACE:
            if self.state.username:
                self.tracker.on_input(self.state.username[:-1])
        elif ch.isprintable():
            self.tracker.on_input(self.state.username + ch)
        return True

    def _quit(self):
        if self._done is not None:
            self._done.set()

    # ── Rendering ───────────────────────────────────────────────

    def _render(self):
        return render_view(self.state, self.theme)

    def _on_change(self, state: TrackerState):
        self._refresh()

    def _refresh(self):
        if self._live is not None:
            self._live.update(self._render())
