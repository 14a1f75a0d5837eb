"""httpx wrapper.

Why a wrapper:
- Standardizes base URL, timeouts and headers for every call to the service.
- Makes testing easy: a `transport` (e.g. `httpx.MockTransport`) can be
  injected without touching the gateway code.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` rooted at the service's `/api` prefix.

    Why a builder:
    - Centralizes timeouts/headers so every operation behaves the same.
    - `http_timeout_seconds=None` disables the deadline entirely: a request
      runs until it succeeds, fails with a status, or the connection drops.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.api_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )
