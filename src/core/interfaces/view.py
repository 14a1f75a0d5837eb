"""Render hooks the controller calls after it changes page state.

The controller mutates `PageState` itself; a view only has to redraw. Every
hook is optional in practice: `NullView` ignores everything.
"""

from __future__ import annotations

from typing import Protocol

from core.domain.page import CopyButton, ResultPanel


class PageView(Protocol):
    def loading_changed(self, visible: bool) -> None:
        ...

    def panel_changed(self, panel: ResultPanel) -> None:
        ...

    def copy_button_changed(self, button: CopyButton) -> None:
        ...


class NullView:
    def loading_changed(self, visible: bool) -> None:
        return None

    def panel_changed(self, panel: ResultPanel) -> None:
        return None

    def copy_button_changed(self, button: CopyButton) -> None:
        return None
