"""httpx wrapper.

Why a wrapper:
- Standardizes base URL, timeout and headers for every API call.
- One place to build the client, so tests (respx) and the CLI see the same setup.
"""

from __future__ import annotations

import httpx

from hetznercloud.core.config import AppSettings


def build_headers(token: str, settings: AppSettings | None = None) -> dict[str, str]:
    """Fixed headers of the Hetzner Cloud API."""

    settings = settings or AppSettings()
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": settings.user_agent,
    }


def build_client(
    token: str,
    settings: AppSettings | None = None,
    *,
    base_url: str | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` bound to the API base URL.

    No retries are configured: failures surface to the caller as raised by httpx.
    """

    settings = settings or AppSettings()
    return httpx.Client(
        base_url=(base_url or settings.api_url).rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=build_headers(token, settings),
    )
