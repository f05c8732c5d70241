"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets the HTTP adapter and the CLI read the same token/URL/timeout.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.hetzner.cloud/v1"


def get_user_config_dir() -> Path:
    """Per-user config directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "hcloud-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "hcloud-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "hcloud-client"
    return Path.home() / ".config" / "hcloud-client"


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


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Write/update variables in the user's global .env.

    Keys with a `None` value are left untouched.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# hcloud-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central configuration.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars) instead of ad-hoc `os.environ`.
    - One configuration contract for the library and the CLI.
    """

    model_config = SettingsConfigDict(
        env_prefix="HCLOUD_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_token: str | None = Field(
        default=None,
        description="Bearer token of the Hetzner Cloud project.",
    )
    api_url: str = Field(
        default=DEFAULT_API_URL,
        min_length=8,
        description="Base URL of the API, without trailing slash.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="hcloud-client/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )

    log_level: str = Field(
        default="WARNING",
        description="stdlib level name for the structlog pipeline.",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Renderer used by structlog.",
    )
