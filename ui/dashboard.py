"""Real-time CLI dashboard for prerender monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log, write_prerender_log

console = Console()


class PrerenderInfo:
    """Info about a single prerendered request."""

    def __init__(self, url: str, user_agent: str, source: str, status: int, timestamp: datetime):
        self.url = url
        self.user_agent = user_agent[:40] + "..." if len(user_agent) > 40 else user_agent
        self.source = source
        self.status = status
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing prerendered and passed-through traffic."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[PrerenderInfo] = []
        self._max_recent = 8
        self._request_count = {"prerendered": 0, "passthrough": 0, "failed": 0}
        self._skip_reasons: dict[str, int] = {}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_prerender(
        self,
        url: str,
        user_agent: str,
        *,
        source: str,
        status: int,
    ) -> None:
        """Log a request answered with a prerendered page."""
        with self._lock:
            self._request_count["prerendered"] += 1
            info = PrerenderInfo(url, user_agent, source, status, datetime.now())
            self._recent.insert(0, info)
            self._recent = self._recent[: self._max_recent]

            write_prerender_log(url, user_agent, source=source, status=status)
            write_cli_log("PRERENDER", url, source=source, status=status)

            self._refresh()

    def log_passthrough(self, url: str, reason: str) -> None:
        """Count a request left to the origin."""
        with self._lock:
            self._request_count["passthrough"] += 1
            self._skip_reasons[reason] = self._skip_reasons.get(reason, 0) + 1
            if self.config.proxy.debug and reason != "not_crawler":
                write_cli_log("SKIP", url, reason=reason)
            self._refresh()

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            if route == "backend":
                self._request_count["failed"] += 1
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=4),
        )

        layout["body"].split_row(
            Layout(name="skips", ratio=1),
            Layout(name="recent", ratio=3),
        )

        layout["header"].update(self._build_header())
        layout["skips"].update(self._build_skips_panel())
        layout["recent"].update(self._build_recent_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Prerender Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Prerendered: {self._request_count['prerendered']}", style="green")
        stats.append("  |  ")
        stats.append(f"Passthrough: {self._request_count['passthrough']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Failed: {self._request_count['failed']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_skips_panel(self) -> Panel:
        """Build panel counting why requests were not prerendered."""
        if self._skip_reasons:
            content = Table.grid(padding=(0, 1))
            content.add_column()
            content.add_column(justify="right")
            for reason, count in sorted(self._skip_reasons.items()):
                content.add_row(f"[bold]{reason}[/bold]", str(count))
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Passthrough[/blue]", border_style="blue")

    def _build_recent_panel(self) -> Panel:
        """Build panel listing recent prerenders."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Source", width=8)
            table.add_column("Status", width=6)
            table.add_column("URL", ratio=2)
            table.add_column("User-Agent", ratio=1)

            for info in self._recent:
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.source,
                    str(info.status),
                    info.url[:60] + "..." if len(info.url) > 60 else info.url,
                    info.user_agent,
                )

            content = table
        else:
            content = Text("No prerendered requests yet...", style="dim")

        return Panel(content, title="[green]Prerendered[/green]", border_style="green")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"Backend {self.config.backend.base_url}  ->  origin {self.config.origin.base_url}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
