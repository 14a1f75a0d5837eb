"""Interaction controller.

This module turns user intents into validated API calls and drives the page:
result panels, the loading indicator and the toast queue. Each action runs
the same shape:

    Idle -> Validating -> Pending -> Settling -> Idle

Validation failures never touch the network. Every failure becomes exactly
one toast. The pending counter is released in a `finally`, so the loading
indicator can never stay on after a call has settled, and with overlapping
actions it only turns off when the last one settles.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from typing import Iterator

from core.config import AppSettings
from core.domain.commands import Command, Intent
from core.domain.models import Severity, ShortenRequest, ShortenResult, StatsQuery, StatsResult
from core.domain.page import DisplayField, PageState, ResultPanel
from core.errors import (
    ApiError,
    ClipboardError,
    NetworkError,
    NotFoundError,
    ShortenerError,
    ValidationError,
)
from core.formatting import format_count, format_timestamp, truncate
from core.interfaces.clipboard import ClipboardBackend
from core.interfaces.gateway import ShortenerGateway
from core.interfaces.view import NullView, PageView
from core.services.notifier import ToastQueue
from core.validators import is_non_empty, is_valid_url

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to URL Shortener! Start by entering a URL to shorten."
HEALTH_WARNING = "Warning: API might not be available"
NETWORK_ERROR_MESSAGE = "Network error. Please try again."
UNEXPECTED_ERROR_MESSAGE = "Something went wrong. Please try again."
COPY_FAILED_MESSAGE = "Failed to copy. Please copy manually."


class InteractionController:
    """Owns the page state for one session.

    Collaborators are injected so tests can drive the controller with fakes:
    a `ShortenerGateway`, a `ToastQueue`, clipboard backends and a `PageView`.
    """

    def __init__(
        self,
        *,
        gateway: ShortenerGateway,
        notifier: ToastQueue,
        page: PageState | None = None,
        clipboard: ClipboardBackend | None = None,
        fallback_clipboard: ClipboardBackend | None = None,
        view: PageView | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self._gateway = gateway
        self._notifier = notifier
        self.page = page if page is not None else PageState()
        self._clipboard = clipboard
        self._fallback_clipboard = fallback_clipboard
        self._view = view or NullView()
        self._settings = settings or AppSettings()
        self._pending = 0
        self._copy_reset: asyncio.TimerHandle | None = None
        self._health_task: asyncio.Task[bool] | None = None

    # -- state ---------------------------------------------------------

    @property
    def pending(self) -> int:
        return self._pending

    @property
    def loading(self) -> bool:
        return self._pending > 0

    @property
    def notifier(self) -> ToastQueue:
        return self._notifier

    @contextmanager
    def _in_flight(self) -> Iterator[None]:
        self._pending += 1
        self._sync_loading()
        try:
            yield
        finally:
            self._pending -= 1
            self._sync_loading()

    def _sync_loading(self) -> None:
        visible = self._pending > 0
        if self.page.loading is not None:
            self.page.loading.visible = visible
        self._view.loading_changed(visible)

    def _toast(self, message: str, severity: Severity) -> None:
        self._notifier.notify(message, severity)

    # -- entry points --------------------------------------------------

    async def start(self) -> asyncio.Task[bool]:
        """Welcome toast, then a health probe in the background.

        The probe never gates anything; the returned task only lets callers
        wait for it if they care.
        """

        if self._settings.show_welcome:
            self._toast(WELCOME_MESSAGE, Severity.SUCCESS)
        self._health_task = asyncio.create_task(self.probe_health())
        return self._health_task

    async def probe_health(self) -> bool:
        healthy = await self._gateway.check_health()
        if not healthy:
            self._toast(HEALTH_WARNING, Severity.WARNING)
        return healthy

    async def dispatch(self, command: Command) -> None:
        intent = command.intent
        if intent is Intent.SUBMIT_SHORTEN:
            await self.submit_shorten()
        elif intent in (Intent.SUBMIT_STATS, Intent.KEY_ENTER_IN_STATS):
            await self.submit_stats()
        elif intent is Intent.COPY:
            await self.copy_short_url()
        elif intent is Intent.URL_INPUT_CHANGED:
            self.url_input_changed(command.text or "")
        else:  # pragma: no cover - Enum is exhaustive
            raise ValueError(f"Unsupported intent: {intent!r}")

    # -- shorten -------------------------------------------------------

    async def submit_shorten(self) -> ShortenResult | None:
        field = self.page.long_url
        if field is None:
            logger.debug("No URL input on this page; skipping shorten")
            return None

        try:
            request = self.validate_shorten(field.value)
        except ValidationError as exc:
            self._toast(exc.message, Severity.ERROR)
            return None
        long_url = request.long_url

        with self._in_flight():
            try:
                result = await self._gateway.shorten(long_url)
            except ShortenerError as exc:
                self._report_failure("shorten", exc)
                return None
            except Exception:
                logger.exception("Unexpected failure while shortening %s", long_url)
                self._toast(UNEXPECTED_ERROR_MESSAGE, Severity.ERROR)
                return None

            self._show_shorten_result(result)
            self._toast("URL shortened successfully!", Severity.SUCCESS)
            field.clear()
            return result

    @staticmethod
    def validate_shorten(raw: str) -> ShortenRequest:
        long_url = raw.strip()
        if not is_non_empty(long_url):
            raise ValidationError("Please enter a URL to shorten")
        if not is_valid_url(long_url):
            raise ValidationError("Please enter a valid URL (must include http:// or https://)")
        return ShortenRequest(long_url=long_url)

    @staticmethod
    def validate_stats(raw: str) -> StatsQuery:
        short_code = raw.strip()
        if not is_non_empty(short_code):
            raise ValidationError("Please enter a short code")
        return StatsQuery(short_code=short_code)

    def _show_shorten_result(self, result: ShortenResult) -> None:
        panel = self.page.shorten_result
        if panel is None:
            return
        panel.populate(
            {
                "short_url": DisplayField(result.short_code),
                "original_url": self._url_field(result.url),
                "created_at": self._time_field(result.created_at),
                "expires_at": self._time_field(result.expires_at),
            }
        )
        self._reveal(panel)

    # -- stats ---------------------------------------------------------

    async def submit_stats(self) -> StatsResult | None:
        field = self.page.short_code
        if field is None:
            logger.debug("No short-code input on this page; skipping stats")
            return None

        try:
            query = self.validate_stats(field.value)
        except ValidationError as exc:
            self._toast(exc.message, Severity.ERROR)
            return None
        short_code = query.short_code

        with self._in_flight():
            try:
                result = await self._gateway.fetch_stats(short_code)
            except NotFoundError:
                self._toast("Short code not found or has expired", Severity.ERROR)
                self._hide(self.page.stats_result)
                return None
            except ShortenerError as exc:
                self._report_failure("stats", exc)
                self._hide(self.page.stats_result)
                return None
            except Exception:
                logger.exception("Unexpected failure while fetching stats for %s", short_code)
                self._toast(UNEXPECTED_ERROR_MESSAGE, Severity.ERROR)
                self._hide(self.page.stats_result)
                return None

            self._show_stats_result(result)
            self._toast("Statistics retrieved successfully!", Severity.SUCCESS)
            return result

    def _show_stats_result(self, result: StatsResult) -> None:
        panel = self.page.stats_result
        if panel is None:
            return
        panel.populate(
            {
                "original_url": self._url_field(result.original_url),
                "short_code": DisplayField(result.short_code),
                "access_count": DisplayField(format_count(result.access_count)),
                "created_at": self._time_field(result.created_at),
                "updated_at": self._time_field(result.updated_at),
                "expires_at": self._time_field(result.expires_at),
            }
        )
        self._reveal(panel)

    # -- update / delete -----------------------------------------------

    async def update_url(self, short_code: str, long_url: str) -> ShortenResult | None:
        """Point an existing short code at a new URL; renders like a shorten."""

        try:
            code = self.validate_stats(short_code).short_code
            target = self.validate_shorten(long_url).long_url
        except ValidationError as exc:
            self._toast(exc.message, Severity.ERROR)
            return None

        with self._in_flight():
            try:
                result = await self._gateway.update(code, target)
            except ShortenerError as exc:
                self._report_failure("update", exc)
                return None
            except Exception:
                logger.exception("Unexpected failure while updating %s", code)
                self._toast(UNEXPECTED_ERROR_MESSAGE, Severity.ERROR)
                return None

            self._show_shorten_result(result)
            self._toast("Short URL updated successfully!", Severity.SUCCESS)
            return result

    async def delete_url(self, short_code: str) -> bool:
        try:
            code = self.validate_stats(short_code).short_code
        except ValidationError as exc:
            self._toast(exc.message, Severity.ERROR)
            return False

        with self._in_flight():
            try:
                await self._gateway.delete(code)
            except ShortenerError as exc:
                self._report_failure("delete", exc)
                return False
            except Exception:
                logger.exception("Unexpected failure while deleting %s", code)
                self._toast(UNEXPECTED_ERROR_MESSAGE, Severity.ERROR)
                return False

            stats = self.page.stats_result
            if stats is not None and stats.text("short_code") == code:
                self._hide(stats)
            self._toast("Short URL deleted", Severity.SUCCESS)
            return True

    # -- copy ----------------------------------------------------------

    async def copy_short_url(self) -> bool:
        panel = self.page.shorten_result
        text = panel.text("short_url") if panel is not None else ""
        if not text:
            self._toast("No URL to copy", Severity.ERROR)
            return False

        try:
            await self._write_clipboard(text)
        except ClipboardError as exc:
            logger.warning("Copy failed: %s", exc)
            self._toast(COPY_FAILED_MESSAGE, Severity.ERROR)
            return False

        self._toast("Short URL copied to clipboard!", Severity.SUCCESS)
        self._confirm_copy()
        return True

    async def _write_clipboard(self, text: str) -> None:
        if self._clipboard is not None:
            try:
                await self._clipboard.write_text(text)
                return
            except Exception as exc:
                logger.info("Primary clipboard (%s) failed: %s", self._clipboard.name, exc)

        if self._fallback_clipboard is None:
            raise ClipboardError("No clipboard mechanism available")
        try:
            await self._fallback_clipboard.write_text(text)
        except ClipboardError:
            raise
        except Exception as exc:
            raise ClipboardError(str(exc)) from exc

    def _confirm_copy(self) -> None:
        button = self.page.copy_button
        if button is None:
            return
        if self._copy_reset is not None:
            self._copy_reset.cancel()
        button.confirm()
        self._view.copy_button_changed(button)
        loop = asyncio.get_running_loop()
        self._copy_reset = loop.call_later(self._settings.copy_feedback_seconds, self._reset_copy_button)

    def _reset_copy_button(self) -> None:
        self._copy_reset = None
        button = self.page.copy_button
        if button is None:
            return
        button.reset()
        self._view.copy_button_changed(button)

    # -- live input feedback -------------------------------------------

    def url_input_changed(self, text: str) -> None:
        field = self.page.long_url
        if field is None:
            return
        field.value = text
        candidate = text.strip()
        field.invalid = bool(candidate) and not is_valid_url(candidate)

    # -- helpers -------------------------------------------------------

    def _report_failure(self, action: str, exc: ShortenerError) -> None:
        if isinstance(exc, NetworkError):
            logger.error("Error during %s: %s", action, exc)
            self._toast(NETWORK_ERROR_MESSAGE, Severity.ERROR)
        elif isinstance(exc, ApiError):
            logger.warning("%s rejected (HTTP %s): %s", action, exc.status_code, exc.message)
            self._toast(exc.message, Severity.ERROR)
        else:
            self._toast(exc.message, Severity.ERROR)

    def _url_field(self, url: str) -> DisplayField:
        return DisplayField(truncate(url, self._settings.truncate_length), title=url)

    @staticmethod
    def _time_field(raw: str | None) -> DisplayField:
        if not raw:
            return DisplayField("n/a")
        return DisplayField(format_timestamp(raw), title=raw)

    def _reveal(self, panel: ResultPanel) -> None:
        panel.reveal()
        panel.scroll_into_view()
        self._view.panel_changed(panel)

    def _hide(self, panel: ResultPanel | None) -> None:
        if panel is None:
            return
        panel.hide()
        self._view.panel_changed(panel)
