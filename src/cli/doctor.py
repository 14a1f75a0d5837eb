"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.clipboard import SystemClipboard
from adapters.shortener_api import ShortenerApiClient
from core.config import AppSettings, write_user_env_vars
from core.validators import is_valid_url

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _settings(ctx: typer.Context) -> AppSettings:
    parent = ctx.find_root().obj
    return parent if isinstance(parent, AppSettings) else AppSettings()


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = _settings(ctx)

    table = Table(title="URL Shortener Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    url_ok = is_valid_url(settings.api_base_url)
    table.add_row("API base URL", "OK" if url_ok else "FAIL", settings.api_base_url)
    timeout = settings.http_timeout_seconds
    table.add_row("Request deadline", "OK", f"{timeout}s" if timeout else "none (requests run to completion)")

    # Connectivity (best-effort)
    healthy = asyncio.run(ShortenerApiClient(settings).check_health()) if url_ok else False
    table.add_row("API health", "OK" if healthy else "FAIL", f"GET {settings.api_url}/health")

    # Clipboard
    command = SystemClipboard().find_command()
    if command:
        table.add_row("Clipboard", "OK", " ".join(command))
    else:
        table.add_row("Clipboard", "FALLBACK", "No clipboard tool -> terminal (OSC 52) copy")

    _console.print(table)

    if not healthy:
        _console.print(
            "\n[yellow]Note:[/yellow] Set the service address with `doctor setup` or SHORTENER_API_BASE_URL."
        )


@app.command()
def setup(ctx: typer.Context) -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = _settings(ctx)
    base_url = typer.prompt("API base URL", default=settings.api_base_url, show_default=True).strip()
    if not is_valid_url(base_url):
        raise typer.BadParameter("API base URL must be an absolute http(s) URL")

    env_path = write_user_env_vars({"SHORTENER_API_BASE_URL": base_url})
    _console.print(f"[green]Saved config to:[/green] {env_path}")
