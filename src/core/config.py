"""Client configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without polluting
  the CLI.
- Lets adapters (HTTP, clipboard) and the controller read config the same way.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "url-shortener-client"


def get_user_config_dir() -> Path:
    """Per-user config directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Write/update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# url-shortener-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central client configuration.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) instead of ad hoc parsing.
    - One config contract for the CLI, adapters and controller.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHORTENER_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="http://localhost:8080",
        min_length=8,
        description="Base URL of the shortening service (the `/api` prefix is added).",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Optional per-request deadline. None means requests run to completion.",
    )
    user_agent: str = Field(
        default="url-shortener-client/0.1",
        min_length=1,
        description="User-Agent sent to the service.",
    )

    toast_duration_seconds: float = Field(
        default=5.0,
        gt=0,
        description="How long a toast stays before it auto-dismisses.",
    )
    toast_animation_seconds: float = Field(
        default=0.3,
        ge=0,
        description="Length of the dismiss animation before removal.",
    )
    copy_feedback_seconds: float = Field(
        default=2.0,
        gt=0,
        description="How long the copy button shows its confirmation.",
    )
    truncate_length: int = Field(
        default=50,
        ge=0,
        description="Max characters of an original URL shown in result panels.",
    )
    show_welcome: bool = Field(
        default=True,
        description="Show the welcome toast when an interactive session starts.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file (logs go to stderr otherwise).",
    )

    @property
    def api_url(self) -> str:
        return self.api_base_url.rstrip("/") + "/api"
