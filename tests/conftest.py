from __future__ import annotations

from typing import Any

import httpx
import pytest

from drupal_headless.config import ClientConfig, get_settings
from drupal_headless.transport import RequestInit

BASE_URL = "https://cms.example.com"


class FakeFetch:
    """Transport double that replays queued responses and records requests.

    Each queued response is ``(status, body)``. A ``str``/``bytes`` body is
    sent verbatim, anything else is JSON-encoded.
    """

    def __init__(self, *responses: tuple[int, Any]) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, RequestInit]] = []

    async def __call__(self, url: str, init: RequestInit) -> httpx.Response:
        self.calls.append((url, init))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {url}")
        status, body = self.responses.pop(0)
        request = httpx.Request(init.method, url)
        if isinstance(body, (str, bytes)):
            return httpx.Response(status, content=body, request=request)
        return httpx.Response(status, json=body, request=request)

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


def entity_item(path: str, node_id: str = "1") -> dict[str, Any]:
    return {
        "path": path,
        "kind": "entity",
        "jsonapi_url": f"{BASE_URL}/jsonapi/node/page/{node_id}",
        "data_url": None,
    }


def view_item(path: str) -> dict[str, Any]:
    return {
        "path": path,
        "kind": "view",
        "jsonapi_url": None,
        "data_url": f"{BASE_URL}/api/views{path}",
    }


def feed_page(items: list[dict[str, Any]], next_url: str | None = None) -> dict[str, Any]:
    return {"data": items, "links": {"next": next_url}, "meta": {"count": len(items)}}


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep DRUPAL_* variables from the host out of the tests."""
    for name in ("DRUPAL_BASE_URL", "DRUPAL_ROUTES_SECRET", "DRUPAL_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, routes_secret="s3cret")


@pytest.fixture
def public_config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL)
