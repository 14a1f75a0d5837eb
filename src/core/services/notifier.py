"""Toast queue: short-lived, independently dismissible notifications.

Lifecycle of a toast:
- `notify` appends it as VISIBLE and tells subscribers right away.
- After `duration` seconds (or on `dismiss`, i.e. a click) it becomes
  DISMISSING for `animation` seconds, then REMOVED and leaves the queue.
- A second dismissal of the same toast does nothing.

Timers are `loop.call_later` handles on the running asyncio loop. Without a
running loop (plain synchronous use) toasts stay until dismissed.

There is no cap on how many toasts are visible at once.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from core.domain.models import Severity, Toast, ToastState

logger = logging.getLogger(__name__)

ToastListener = Callable[[str, Toast], None]

SHOWN = "shown"
DISMISSING = "dismissing"
REMOVED = "removed"


class ToastQueue:
    def __init__(self, *, duration: float = 5.0, animation: float = 0.3) -> None:
        self._duration = duration
        self._animation = animation
        self._toasts: list[Toast] = []
        self._timers: dict[int, asyncio.TimerHandle] = {}
        self._listeners: list[ToastListener] = []

    @property
    def toasts(self) -> list[Toast]:
        """Toasts still on screen (visible or animating out), oldest first."""

        return list(self._toasts)

    @property
    def visible(self) -> list[Toast]:
        return [t for t in self._toasts if t.state is ToastState.VISIBLE]

    def subscribe(self, listener: ToastListener) -> None:
        self._listeners.append(listener)

    def notify(self, message: str, severity: Severity | str = Severity.INFO) -> Toast:
        toast = Toast(message=message, severity=Severity.coerce(severity))
        self._toasts.append(toast)
        logger.debug("toast %s [%s] %s", toast.id, toast.severity.value, message)
        self._emit(SHOWN, toast)
        self._schedule(toast.id, self._duration, self.dismiss)
        return toast

    def dismiss(self, toast_id: int) -> bool:
        """Start the dismiss animation. Returns False if already dismissed."""

        toast = self._find(toast_id)
        if toast is None or toast.state is not ToastState.VISIBLE:
            return False

        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.cancel()

        toast.state = ToastState.DISMISSING
        self._emit(DISMISSING, toast)
        if not self._schedule(toast_id, self._animation, self._remove):
            self._remove(toast_id)
        return True

    def clear(self) -> None:
        for toast in list(self._toasts):
            self.dismiss(toast.id)

    def _remove(self, toast_id: int) -> None:
        self._timers.pop(toast_id, None)
        toast = self._find(toast_id)
        if toast is None:
            return
        self._toasts.remove(toast)
        toast.state = ToastState.REMOVED
        self._emit(REMOVED, toast)

    def _schedule(self, toast_id: int, delay: float, callback: Callable[[int], object]) -> bool:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return False
        self._timers[toast_id] = loop.call_later(delay, callback, toast_id)
        return True

    def _find(self, toast_id: int) -> Toast | None:
        for toast in self._toasts:
            if toast.id == toast_id:
                return toast
        return None

    def _emit(self, event: str, toast: Toast) -> None:
        for listener in self._listeners:
            listener(event, toast)
