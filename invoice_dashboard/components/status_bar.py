"""Status bar component showing clock, loading progress and keyboard hints."""

from datetime import datetime

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Static


class StatusBar(Horizontal):
    """Bottom status bar with time, region progress, and keyboard hints."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        padding: 0 1;
        width: 100%;
        dock: bottom;
    }

    StatusBar #status-time {
        width: auto;
    }

    StatusBar #status-refresh {
        width: auto;
        padding-left: 2;
    }

    StatusBar #status-activity {
        width: auto;
        padding-left: 2;
        color: $warning;
    }

    StatusBar #status-spacer {
        width: 1fr;
    }

    StatusBar #status-hints {
        width: auto;
        text-align: right;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._last_refresh: datetime | None = None
        self._activity = ""

    def compose(self) -> ComposeResult:
        yield Static("", id="status-time")
        yield Static("", id="status-refresh")
        yield Static("", id="status-activity")
        yield Static("", id="status-spacer")
        yield Static("[dim]r[/dim] Refresh  [dim]q[/dim] Quit", id="status-hints")

    def on_mount(self) -> None:
        """Start clock update timer."""
        self._update_time()
        self.set_activity(self._activity)
        self.set_interval(1, self._update_time)

    def _update_time(self) -> None:
        """Update the current time display."""
        if not self.is_mounted:
            return
        now = datetime.now()
        self.query_one("#status-time", Static).update(f"[bold]{now.strftime('%H:%M:%S')}[/bold]")

        refresh_text = self.refresh_text(now)
        if refresh_text:
            self.query_one("#status-refresh", Static).update(f"[dim]{refresh_text}[/dim]")

    @property
    def activity(self) -> str:
        """Current activity message, empty when idle."""
        return self._activity

    def refresh_text(self, now: datetime | None = None) -> str:
        """Describe how long ago the regions last finished loading."""
        if self._last_refresh is None:
            return ""
        minutes = int(((now or datetime.now()) - self._last_refresh).total_seconds() // 60)
        if minutes == 0:
            return "Refreshed just now"
        if minutes == 1:
            return "Refreshed 1 min ago"
        return f"Refreshed {minutes} mins ago"

    def set_last_refresh(self, time: datetime | None = None) -> None:
        """Update the last refresh timestamp."""
        self._last_refresh = time or datetime.now()
        self._update_time()

    def set_progress(self, resolved: int, total: int) -> None:
        """Show how many regions are still loading."""
        if resolved >= total:
            self.set_activity("")
            self.set_last_refresh()
        else:
            self.set_activity(f"Loading {total - resolved} of {total} regions...")

    def set_activity(self, activity: str) -> None:
        """Set current activity message."""
        self._activity = activity
        try:
            self.query_one("#status-activity", Static).update(
                f"[yellow]{activity}[/yellow]" if activity else ""
            )
        except NoMatches:
            pass  # Applied on mount

