"""Terminal view: draws page changes as the controller makes them."""

from __future__ import annotations

from rich.console import Console
from rich.status import Status

from cli.ui_components import build_copy_button, build_result_panel, build_toast
from core.domain.models import Toast
from core.domain.page import CopyButton, ResultPanel
from core.services.notifier import SHOWN


class TerminalView:
    """`PageView` implementation that prints to a Rich console.

    Also subscribes to the toast queue (`on_toast`) so toasts show up the
    moment they are raised. With `spinner=False` the loading indicator is
    a printed line instead of a live spinner, for sessions that keep a prompt
    open while requests run.
    """

    def __init__(self, console: Console, *, spinner: bool = True) -> None:
        self.console = console
        self.spinner = spinner
        self._status: Status | None = None
        self._loading = False

    def loading_changed(self, visible: bool) -> None:
        if not self.spinner:
            if visible and not self._loading:
                self.console.print("[dim]Loading...[/dim]")
            self._loading = visible
            return
        if visible and self._status is None:
            self._status = self.console.status("Loading...", spinner="dots")
            self._status.start()
        elif not visible and self._status is not None:
            self._status.stop()
            self._status = None

    def panel_changed(self, panel: ResultPanel) -> None:
        if panel.visible and panel.in_view:
            self.console.print(build_result_panel(panel))
            panel.in_view = False

    def copy_button_changed(self, button: CopyButton) -> None:
        if button.highlighted:
            self.console.print(build_copy_button(button))

    def on_toast(self, event: str, toast: Toast) -> None:
        if event == SHOWN:
            self.console.print(build_toast(toast))
