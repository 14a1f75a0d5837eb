"""Input predicates.

Both functions are total: any input returns a bool, nothing raises.
"""

from __future__ import annotations

from urllib.parse import urlsplit

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def is_valid_url(value: object) -> bool:
    """True iff `value` is an absolute http(s) URL with a host."""

    if not isinstance(value, str):
        return False
    candidate = value.strip()
    if not candidate:
        return False

    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
        # Accessing `port` validates it (raises on garbage like ":abc").
        _ = parts.port
    except ValueError:
        return False

    if parts.scheme.lower() not in _ALLOWED_SCHEMES:
        return False
    if not parts.netloc or not hostname:
        return False
    if any(ch.isspace() for ch in parts.netloc):
        return False
    return True


def is_non_empty(value: str | None) -> bool:
    return bool(value and value.strip())
