"""Shared fixtures: the Hetzner API mocked with respx, JSON bodies from fixtures/."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest
import respx

from hetznercloud.adapters.cloud_api import HetznerCloudAPI
from hetznercloud.adapters.http_client import build_client
from hetznercloud.core.config import DEFAULT_API_URL, AppSettings

FIXTURES = Path(__file__).parent / "fixtures"
TOKEN = "test-token"


def load_fixture(name: str) -> dict[str, Any]:
    return json.loads((FIXTURES / f"{name}.json").read_text(encoding="utf-8"))


class FakeHetzner:
    """Thin helper over a respx router.

    Paths are relative to the API base URL (`/servers`, not `/v1/servers`).
    """

    def __init__(self, router: respx.MockRouter) -> None:
        self.router = router

    def add(
        self,
        method: str,
        path: str,
        *,
        fixture: str | None = None,
        json_body: Any = None,
        status_code: int = 200,
        content: bytes | None = None,
    ) -> respx.Route:
        if fixture is not None:
            json_body = load_fixture(fixture)
        if content is not None:
            response = httpx.Response(status_code, content=content)
        else:
            response = httpx.Response(status_code, json=json_body)
        return self.router.route(method=method, path=path).mock(return_value=response)

    @property
    def requests(self) -> list[httpx.Request]:
        return [call.request for call in self.router.calls]

    @property
    def last(self) -> httpx.Request:
        return self.router.calls.last.request

    def body_of(self, request: httpx.Request) -> Any:
        if not request.content:
            return None
        return json.loads(request.content)


@pytest.fixture
def token() -> str:
    return TOKEN


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, api_token=None)


@pytest.fixture
def fake() -> FakeHetzner:
    with respx.mock(base_url=DEFAULT_API_URL, assert_all_called=False) as router:
        yield FakeHetzner(router)


@pytest.fixture
def http_client(fake: FakeHetzner, settings: AppSettings) -> httpx.Client:
    client = build_client(TOKEN, settings)
    yield client
    client.close()


@pytest.fixture
def api(http_client: httpx.Client, settings: AppSettings) -> HetznerCloudAPI:
    return HetznerCloudAPI(TOKEN, settings=settings, client=http_client)
