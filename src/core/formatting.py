"""Presentation helpers.

Rules:
- Pure functions, no I/O.
- `format_timestamp` must never be the reason a render fails: on a bad value
  it hands the raw input back.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo

from core.errors import FormatError

logger = logging.getLogger(__name__)

ELLIPSIS = "..."


def truncate(text: str, max_length: int = 50) -> str:
    if max_length < 0:
        raise ValueError("max_length must be non-negative")
    if len(text) <= max_length:
        return text
    return text[:max_length] + ELLIPSIS


def parse_timestamp(raw: object) -> datetime:
    """Parse an ISO-8601 value (a trailing `Z` is accepted) into a datetime."""

    if isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise FormatError(f"Not a timestamp: {raw!r}")

    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise FormatError(f"Not a timestamp: {raw!r}") from exc


def format_timestamp(raw: object, tz: tzinfo | None = None) -> str:
    """Render e.g. `Jan 1, 2024, 12:00 AM`.

    Aware values are converted to `tz` (local zone when omitted); naive values
    are shown as-is.
    """

    try:
        value = parse_timestamp(raw)
    except FormatError as exc:
        logger.debug("Leaving timestamp unformatted: %s", exc)
        return raw if isinstance(raw, str) else str(raw)

    try:
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return f"{value:%b} {value.day}, {value.year}, {value:%I:%M %p}"
    except (OverflowError, ValueError, OSError) as exc:
        # Aware values at the edges of the datetime range cannot be shifted.
        logger.debug("Leaving timestamp unformatted: %s", exc)
        return raw if isinstance(raw, str) else str(raw)


def format_count(count: int) -> str:
    return f"{count:,}"
