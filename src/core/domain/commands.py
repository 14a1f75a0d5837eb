"""User intents routed to the controller's single entry point."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Intent(str, Enum):
    SUBMIT_SHORTEN = "submit_shorten"
    SUBMIT_STATS = "submit_stats"
    COPY = "copy"
    KEY_ENTER_IN_STATS = "key_enter_in_stats"
    URL_INPUT_CHANGED = "url_input_changed"


@dataclass(frozen=True)
class Command:
    intent: Intent
    text: str | None = None  # only for URL_INPUT_CHANGED
