"""Contract for a clipboard mechanism."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClipboardBackend(Protocol):
    name: str

    async def write_text(self, text: str) -> None:
        """Copy `text`; raise on failure (`ClipboardError` preferred)."""

        ...
