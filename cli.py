"""CLI entry point for prerender-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, Config, load_config
from core.exceptions import ConfigurationError
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    try:
        config = load_config()
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        sys.exit(1)

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--check":
            _print_check(config)
            return

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

    if not config.backend.token:
        console.print("[yellow]Warning:[/yellow] No backend token configured (backend.token)")

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(config)

    import uvicorn

    try:
        app = create_app(config, dashboard)
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        sys.exit(1)

    # Run with dashboard
    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        dashboard.stop()


def _print_check(config: Config):
    """Print a summary of the validated configuration."""
    prerender = config.prerender
    console.print(f"[green]Config OK[/green] ({CONFIG_FILE})")
    console.print(f"[bold]Backend:[/bold] {config.backend.base_url}")
    console.print(f"[bold]Origin:[/bold] {config.origin.base_url}")
    console.print(f"[bold]Token:[/bold] {'set' if config.backend.token else '[yellow]not set[/yellow]'}")
    console.print(f"[bold]Crawler agents:[/bold] {len(prerender.crawler_user_agents)}")
    console.print(f"[bold]Ignored extensions:[/bold] {len(prerender.ignored_extensions)}")
    console.print(f"[bold]Whitelist:[/bold] {', '.join(prerender.whitelisted_urls) or '[dim]none[/dim]'}")
    console.print(f"[bold]Blacklist:[/bold] {', '.join(prerender.blacklisted_urls) or '[dim]none[/dim]'}")


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Prerender Proxy[/bold cyan]

Serves prerendered pages to crawlers, forwards everything else to the origin.

[bold]Usage:[/bold]
    prerender-proxy              Start with live dashboard
    prerender-proxy --check      Validate config and show a summary
    prerender-proxy --config     Show config location
    prerender-proxy --help       Show this help

[bold]Configuration:[/bold]
    Edit backend.base_url, backend.token and origin.base_url in the config
    file. Crawler agents, ignored extensions and URL patterns live under
    the prerender section.
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
