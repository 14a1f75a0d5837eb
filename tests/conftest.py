"""Pytest configuration and fixtures."""

from __future__ import annotations

import asyncio

import pytest

from core.config import AppSettings
from core.domain.models import ShortenResult, StatsResult
from core.errors import ClipboardError
from core.services.controller import InteractionController
from core.services.notifier import ToastQueue


class FakeGateway:
    """In-memory `ShortenerGateway`.

    Outcomes are either a result (returned) or an exception (raised). While a
    call is in progress it records whether the controller reported loading.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.shorten_outcome: object = None
        self.stats_outcomes: dict[str, object] = {}
        self.update_outcome: object = None
        self.delete_outcome: object = None
        self.healthy = True
        self.loading_seen: list[bool] = []
        self.controller: InteractionController | None = None
        self.gates: dict[str, asyncio.Event] = {}

    async def _settle(self, name: str, outcome: object) -> object:
        if self.controller is not None:
            self.loading_seen.append(self.controller.loading)
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def shorten(self, long_url: str) -> ShortenResult:
        self.calls.append(("shorten", long_url))
        return await self._settle("shorten", self.shorten_outcome)  # type: ignore[return-value]

    async def fetch_stats(self, short_code: str) -> StatsResult:
        self.calls.append(("stats", short_code))
        return await self._settle("stats", self.stats_outcomes.get(short_code))  # type: ignore[return-value]

    async def update(self, short_code: str, long_url: str) -> ShortenResult:
        self.calls.append(("update", short_code, long_url))
        return await self._settle("update", self.update_outcome)  # type: ignore[return-value]

    async def delete(self, short_code: str) -> None:
        self.calls.append(("delete", short_code))
        await self._settle("delete", self.delete_outcome)

    async def check_health(self) -> bool:
        self.calls.append(("health",))
        return self.healthy


class FakeClipboard:
    def __init__(self, name: str, *, error: Exception | None = None) -> None:
        self.name = name
        self.error = error
        self.copied: list[str] = []

    async def write_text(self, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.copied.append(text)


SHORTEN_PAYLOAD = {
    "shortCode": "abc123",
    "url": "http://example.com/very/long/path",
    "createdAt": "2024-01-01T00:00:00Z",
    "expiresAt": "2024-02-01T00:00:00Z",
}

STATS_PAYLOAD = {
    "originalUrl": "https://example.com/a/rather/long/path/that/keeps/going/and/going/forever",
    "shortCode": "ABC",
    "accessCount": 5,
    "createdAt": "2024-01-01T00:00:00Z",
    "updatedAt": "2024-01-02T10:30:00Z",
    "expiresAt": "2024-02-01T00:00:00Z",
}


@pytest.fixture
def settings() -> AppSettings:
    """Settings with short timers and no .env lookups."""

    return AppSettings(
        _env_file=None,
        api_base_url="http://shortener.test",
        toast_duration_seconds=0.5,
        toast_animation_seconds=0.01,
        copy_feedback_seconds=0.05,
    )


@pytest.fixture
def notifier(settings) -> ToastQueue:
    return ToastQueue(
        duration=settings.toast_duration_seconds,
        animation=settings.toast_animation_seconds,
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def primary_clipboard() -> FakeClipboard:
    return FakeClipboard("primary")


@pytest.fixture
def fallback_clipboard() -> FakeClipboard:
    return FakeClipboard("fallback")


@pytest.fixture
def controller(settings, notifier, gateway, primary_clipboard, fallback_clipboard) -> InteractionController:
    ctrl = InteractionController(
        gateway=gateway,
        notifier=notifier,
        clipboard=primary_clipboard,
        fallback_clipboard=fallback_clipboard,
        settings=settings,
    )
    gateway.controller = ctrl
    return ctrl


@pytest.fixture
def shorten_result() -> ShortenResult:
    return ShortenResult.model_validate(SHORTEN_PAYLOAD)


@pytest.fixture
def stats_result() -> StatsResult:
    return StatsResult.model_validate(STATS_PAYLOAD)


def failing_clipboard(name: str) -> FakeClipboard:
    return FakeClipboard(name, error=ClipboardError(f"{name} unavailable"))
