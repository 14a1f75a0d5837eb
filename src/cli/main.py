"""Command-line entry point (Typer).

One-shot commands (`shorten`, `stats`, `update`, `delete`, `health`) build a
fresh session, run a single action and exit non-zero when it fails. The
`interactive` command keeps one session open and reads commands from the
prompt while requests run in the background.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.clipboard import SystemClipboard, TerminalClipboard
from adapters.shortener_api import ShortenerApiClient
from cli.doctor import app as doctor_app
from cli.page import TerminalView
from cli.ui_components import build_page, print_banner
from core.config import AppSettings
from core.domain.commands import Command, Intent
from core.interfaces.gateway import ShortenerGateway
from core.logging_config import setup_logging
from core.services.controller import InteractionController
from core.services.notifier import ToastQueue
from core.validators import is_valid_url

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Shorten URLs and inspect their statistics.")
app.add_typer(doctor_app, name="doctor")

_console = Console()

INTERACTIVE_HELP = """\
[bold]Commands[/bold]
  url TEXT        type into the long-URL field (validated as you go)
  shorten [URL]   submit the shorten form
  code TEXT       type a short code and press Enter
  stats [CODE]    submit the stats form
  copy            copy the current short URL
  dismiss ID      dismiss a toast
  show            redraw the page
  wait            wait for requests still in flight
  help            this text
  quit            leave"""


def build_gateway(settings: AppSettings) -> ShortenerGateway:
    return ShortenerApiClient(settings)


def build_session(settings: AppSettings, console: Console, *, spinner: bool = True) -> InteractionController:
    """Wire a controller to the HTTP gateway, clipboards and a terminal view."""

    view = TerminalView(console, spinner=spinner)
    notifier = ToastQueue(
        duration=settings.toast_duration_seconds,
        animation=settings.toast_animation_seconds,
    )
    notifier.subscribe(view.on_toast)
    return InteractionController(
        gateway=build_gateway(settings),
        notifier=notifier,
        clipboard=SystemClipboard(),
        fallback_clipboard=TerminalClipboard(console),
        view=view,
        settings=settings,
    )


def _run_once(settings: AppSettings, action: Callable[[InteractionController], Awaitable[T]]) -> T:
    async def runner() -> T:
        controller = build_session(settings, _console)
        return await action(controller)

    return asyncio.run(runner())


def _settings(ctx: typer.Context) -> AppSettings:
    settings = ctx.obj
    if not isinstance(settings, AppSettings):
        settings = AppSettings()
    return settings


@app.callback()
def main(
    ctx: typer.Context,
    api_url: Optional[str] = typer.Option(
        None, "--api-url", help="Base URL of the shortening service (overrides SHORTENER_API_BASE_URL)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    overrides: dict[str, object] = {}
    if api_url:
        if not is_valid_url(api_url):
            raise typer.BadParameter("must be an absolute http(s) URL", param_hint="--api-url")
        overrides["api_base_url"] = api_url
    if verbose:
        overrides["log_level"] = "DEBUG"
    try:
        settings = AppSettings(**overrides)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="configuration") from exc
    setup_logging(settings.log_level, settings.log_file)
    ctx.obj = settings


@app.command()
def shorten(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Absolute http(s) URL to shorten."),
    copy: bool = typer.Option(False, "--copy", "-c", help="Copy the short URL afterwards."),
) -> None:
    """Shorten a URL."""

    async def action(controller: InteractionController) -> bool:
        await controller.dispatch(Command(Intent.URL_INPUT_CHANGED, text=url))
        await controller.dispatch(Command(Intent.SUBMIT_SHORTEN))
        panel = controller.page.shorten_result
        ok = panel is not None and panel.visible
        if ok and copy:
            await controller.dispatch(Command(Intent.COPY))
        return ok

    if not _run_once(_settings(ctx), action):
        raise typer.Exit(code=1)


@app.command()
def stats(
    ctx: typer.Context,
    short_code: str = typer.Argument(..., help="Short code to look up."),
) -> None:
    """Show access statistics for a short code."""

    async def action(controller: InteractionController) -> bool:
        if controller.page.short_code is not None:
            controller.page.short_code.value = short_code
        await controller.dispatch(Command(Intent.SUBMIT_STATS))
        panel = controller.page.stats_result
        return panel is not None and panel.visible

    if not _run_once(_settings(ctx), action):
        raise typer.Exit(code=1)


@app.command()
def update(
    ctx: typer.Context,
    short_code: str = typer.Argument(..., help="Existing short code."),
    url: str = typer.Argument(..., help="New destination URL."),
) -> None:
    """Point an existing short code at a new URL."""

    async def action(controller: InteractionController) -> bool:
        return await controller.update_url(short_code, url) is not None

    if not _run_once(_settings(ctx), action):
        raise typer.Exit(code=1)


@app.command()
def delete(
    ctx: typer.Context,
    short_code: str = typer.Argument(..., help="Short code to delete."),
) -> None:
    """Delete a short code."""

    async def action(controller: InteractionController) -> bool:
        return await controller.delete_url(short_code)

    if not _run_once(_settings(ctx), action):
        raise typer.Exit(code=1)


@app.command()
def health(ctx: typer.Context) -> None:
    """Probe the service's liveness endpoint."""

    settings = _settings(ctx)
    healthy = asyncio.run(build_gateway(settings).check_health())
    if healthy:
        _console.print(f"[green]API is up[/green] ({settings.api_url})")
        return
    _console.print(f"[yellow]API might not be available[/yellow] ({settings.api_url})")
    raise typer.Exit(code=1)


@app.command()
def interactive(ctx: typer.Context) -> None:
    """Open an interactive session (welcome, health probe, prompt)."""

    asyncio.run(_interactive(_settings(ctx), _console))


async def _interactive(settings: AppSettings, console: Console) -> None:
    controller = build_session(settings, console, spinner=False)
    page = controller.page
    in_flight: set[asyncio.Task[None]] = set()

    def spawn(command: Command) -> None:
        task = asyncio.create_task(controller.dispatch(command))
        in_flight.add(task)
        task.add_done_callback(in_flight.discard)

    print_banner(console)
    await controller.start()
    console.print("Type [bold]help[/bold] for commands.")

    while True:
        try:
            line = await asyncio.to_thread(console.input, "[bold cyan]>[/bold cyan] ")
        except (EOFError, KeyboardInterrupt):
            break

        verb, _, arg = line.strip().partition(" ")
        verb = verb.lower()
        arg = arg.strip()

        if verb in ("quit", "exit", "q"):
            break
        if verb == "help" or not verb:
            console.print(INTERACTIVE_HELP)
        elif verb == "url":
            await controller.dispatch(Command(Intent.URL_INPUT_CHANGED, text=arg))
            if page.long_url is not None and page.long_url.invalid:
                console.print("[red]✖ not a valid http(s) URL yet[/red]")
        elif verb == "shorten":
            if arg:
                await controller.dispatch(Command(Intent.URL_INPUT_CHANGED, text=arg))
            spawn(Command(Intent.SUBMIT_SHORTEN))
        elif verb in ("code", "stats"):
            if arg and page.short_code is not None:
                page.short_code.value = arg
            spawn(Command(Intent.KEY_ENTER_IN_STATS if verb == "code" else Intent.SUBMIT_STATS))
        elif verb == "copy":
            await controller.dispatch(Command(Intent.COPY))
        elif verb == "dismiss":
            if not arg.isdigit() or not controller.notifier.dismiss(int(arg)):
                console.print(f"[dim]No visible toast {arg!r}[/dim]")
        elif verb == "show":
            console.print(build_page(page, controller.notifier.toasts))
        elif verb == "wait":
            if in_flight:
                await asyncio.gather(*in_flight)
        else:
            console.print(f"[yellow]Unknown command {verb!r}[/yellow]; type [bold]help[/bold].")

    if in_flight:
        await asyncio.gather(*in_flight)
    controller.notifier.clear()


def run() -> None:
    app()
