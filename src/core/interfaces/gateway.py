"""Contract for the remote shortening service.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- The controller can be driven by the real HTTP adapter or by an in-memory
  fake in tests, without coupling the core to httpx.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ShortenResult, StatsResult


@runtime_checkable
class ShortenerGateway(Protocol):
    """Minimal contract for the shortening API.

    Design rules:
    - Every call is async because it does network I/O.
    - Failures surface as `core.errors` kinds (`ApiError`, `NotFoundError`,
      `NetworkError`), except `check_health`, which only ever returns a bool.
    """

    async def shorten(self, long_url: str) -> ShortenResult:
        ...

    async def fetch_stats(self, short_code: str) -> StatsResult:
        ...

    async def check_health(self) -> bool:
        ...

    async def update(self, short_code: str, long_url: str) -> ShortenResult:
        ...

    async def delete(self, short_code: str) -> None:
        ...
