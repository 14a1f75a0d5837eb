"""Domain models (Pydantic v2).

Why Pydantic here:
- The service speaks camelCase JSON; aliases keep Python names snake_case
  while `model_validate` accepts the wire shape unchanged.
- Validation at the edge: a malformed success body becomes one error instead
  of a half-rendered panel.

Note:
- Timestamps stay raw strings. They are formatted at render time so that an
  odd value degrades to "shown as-is" instead of failing the whole result.
"""

from __future__ import annotations

import itertools
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ShortenRequest(_WireModel):
    long_url: str = Field(..., min_length=1, description="Absolute http/https URL to shorten.")


class ShortenResult(_WireModel):
    """Outcome of a successful shorten (or update) call."""

    short_code: str = Field(
        ...,
        alias="shortCode",
        min_length=1,
        description="Short code (some deployments return the full redirect URL here).",
    )
    url: str = Field(..., description="Original long URL.")
    created_at: str = Field(..., alias="createdAt")
    expires_at: str | None = Field(default=None, alias="expiresAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")


class StatsQuery(_WireModel):
    short_code: str = Field(..., min_length=1)


class StatsResult(_WireModel):
    """Access statistics for one short code."""

    original_url: str = Field(..., alias="originalUrl")
    short_code: str = Field(..., alias="shortCode")
    access_count: int = Field(default=0, alias="accessCount", ge=0)
    created_at: str = Field(..., alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    expires_at: str | None = Field(default=None, alias="expiresAt")


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def coerce(cls, value: object) -> "Severity":
        """Map arbitrary input to a severity; anything unknown becomes INFO."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.INFO


class ToastState(str, Enum):
    VISIBLE = "visible"
    DISMISSING = "dismissing"
    REMOVED = "removed"


_toast_ids = itertools.count(1)


class Toast(BaseModel):
    """A transient notification.

    Mutable on purpose: only `state` changes, and only the toast queue
    changes it.
    """

    id: int = Field(default_factory=lambda: next(_toast_ids))
    message: str
    severity: Severity = Severity.INFO
    created_at: datetime = Field(default_factory=datetime.now)
    state: ToastState = ToastState.VISIBLE
