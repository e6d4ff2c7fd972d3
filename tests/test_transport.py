from __future__ import annotations

import httpx
import pytest

from drupal_headless.transport import HttpxFetch, RequestInit, get_fetch, merge_headers


def test_merge_headers_is_case_insensitive_and_later_wins():
    merged = merge_headers({"Accept": "text/html", "X-One": "1"}, None, [("accept", "application/json")])

    assert merged["ACCEPT"] == "application/json"
    assert merged["x-one"] == "1"
    assert len(merged) == 2


def test_request_init_coerces_headers():
    init = RequestInit(headers={"Authorization": "Bearer t"})

    assert isinstance(init.headers, httpx.Headers)
    assert init.headers["authorization"] == "Bearer t"
    assert init.method == "GET"
    assert init.cache is None


def test_get_fetch_prefers_caller_callable():
    async def custom(url, init):
        raise NotImplementedError

    assert get_fetch(custom) is custom
    assert isinstance(get_fetch(None, timeout=3), HttpxFetch)


@pytest.mark.asyncio
async def test_httpx_fetch_maps_cache_directive(httpx_mock):
    httpx_mock.add_response(url="https://cms.example.com/a", json={"ok": True})

    response = await HttpxFetch()("https://cms.example.com/a", RequestInit(cache="no-store"))

    assert response.is_success
    assert response.json() == {"ok": True}
    assert httpx_mock.get_requests()[0].headers["Cache-Control"] == "no-store"


@pytest.mark.asyncio
async def test_httpx_fetch_keeps_caller_cache_control(httpx_mock):
    httpx_mock.add_response(url="https://cms.example.com/a", json={})

    await HttpxFetch()(
        "https://cms.example.com/a",
        RequestInit(cache="no-store", headers={"Cache-Control": "max-age=0"}),
    )

    assert httpx_mock.get_requests()[0].headers["Cache-Control"] == "max-age=0"


@pytest.mark.asyncio
async def test_httpx_fetch_default_cache_sends_no_header(httpx_mock):
    httpx_mock.add_response(url="https://cms.example.com/a", json={})

    await HttpxFetch()("https://cms.example.com/a", RequestInit(cache="default"))

    assert "Cache-Control" not in httpx_mock.get_requests()[0].headers


@pytest.mark.asyncio
async def test_httpx_fetch_uses_injected_client(httpx_mock):
    httpx_mock.add_response(url="https://cms.example.com/a", status_code=404)

    async with httpx.AsyncClient(headers={"User-Agent": "site-builder"}) as client:
        response = await HttpxFetch(client)("https://cms.example.com/a", RequestInit())

    assert response.status_code == 404
    assert not response.is_success
    assert httpx_mock.get_requests()[0].headers["User-Agent"] == "site-builder"


@pytest.mark.asyncio
async def test_httpx_fetch_context_manager_owns_client():
    fetch = HttpxFetch(timeout=2)

    async with fetch:
        client = fetch._client
        assert isinstance(client, httpx.AsyncClient)

    assert client.is_closed
    assert fetch._client is None


@pytest.mark.asyncio
async def test_httpx_fetch_context_manager_leaves_injected_client_open():
    async with httpx.AsyncClient() as client:
        async with HttpxFetch(client):
            pass
        assert not client.is_closed
