"""UI components for the CLI (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- The same panels and toasts are reused by one-shot commands and the
  interactive session.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Severity, Toast, ToastState
from core.domain.page import CopyButton, PageState, ResultPanel

TOAST_STYLES: dict[Severity, tuple[str, str]] = {
    Severity.SUCCESS: ("✔", "green"),
    Severity.ERROR: ("✖", "red"),
    Severity.WARNING: ("⚠", "yellow"),
    Severity.INFO: ("ℹ", "cyan"),
}

PANEL_TITLES = {
    "shorten_result": "Short URL",
    "stats_result": "Statistics",
}

FIELD_LABELS = {
    "short_url": "Short URL",
    "short_code": "Short code",
    "original_url": "Original URL",
    "access_count": "Access count",
    "created_at": "Created",
    "updated_at": "Updated",
    "expires_at": "Expires",
}


def print_banner(console: Console) -> None:
    """Print the welcome banner (interactive session only)."""

    title = Text("URL Shortener", style="bold cyan")
    subtitle = Text("shorten • stats • copy", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_toast(toast: Toast) -> Text:
    icon, style = TOAST_STYLES.get(toast.severity, TOAST_STYLES[Severity.INFO])
    text = Text()
    text.append(f"{icon} ", style=f"bold {style}")
    text.append(toast.message, style="dim" if toast.state is not ToastState.VISIBLE else style)
    return text


def build_result_panel(panel: ResultPanel) -> Panel:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold", no_wrap=True)
    table.add_column()
    for name in panel.field_names:
        entry = panel.fields.get(name)
        if entry is None:
            continue
        value = Text(entry.text, style="magenta" if name in ("short_url", "short_code") else "")
        table.add_row(FIELD_LABELS.get(name, name), value)
    title = PANEL_TITLES.get(panel.name, panel.name)
    return Panel(table, title=Text(title, style="bold green"), border_style="green")


def build_copy_button(button: CopyButton) -> Text:
    style = "bold white on green" if button.highlighted else "bold"
    return Text(f"[ {button.label} ]", style=style)


def build_page(page: PageState, toasts: list[Toast]) -> RenderableType:
    """Whole-page snapshot: inputs, visible panels, copy button, toasts."""

    parts: list[RenderableType] = []

    inputs = Table.grid(padding=(0, 2))
    inputs.add_column(style="bold", no_wrap=True)
    inputs.add_column()
    if page.long_url is not None:
        style = "red" if page.long_url.invalid else ""
        inputs.add_row("Long URL", Text(page.long_url.value or "-", style=style))
    if page.short_code is not None:
        inputs.add_row("Short code", Text(page.short_code.value or "-"))
    parts.append(inputs)

    for panel in (page.shorten_result, page.stats_result):
        if panel is not None and panel.visible:
            parts.append(build_result_panel(panel))
            if panel.name == "shorten_result" and page.copy_button is not None:
                parts.append(build_copy_button(page.copy_button))

    if page.loading is not None and page.loading.visible:
        parts.append(Text("Loading...", style="yellow"))

    for toast in toasts:
        parts.append(build_toast(toast))

    return Group(*parts)
