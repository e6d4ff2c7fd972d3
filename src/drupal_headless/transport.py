"""Pluggable HTTP transport.

Every network call in this package goes through a ``FetchLike`` callable:
``await fetch(url, init) -> httpx.Response``. ``HttpxFetch`` is the
default implementation; tests and callers with special needs inject their
own callable (or their own ``httpx.AsyncClient``) instead.

The response contract is the subset of ``httpx.Response`` the core uses:
``status_code``, ``reason_phrase``, ``is_success`` and ``json()``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from drupal_headless.config import DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

HeadersInput = Union[httpx.Headers, Mapping[str, str], Sequence[tuple[str, str]], None]

# fetch()-style cache directives mapped onto request Cache-Control values
_CACHE_CONTROL = {
    "no-store": "no-store",
    "no-cache": "no-cache",
    "reload": "no-cache",
}


class RequestInit(BaseModel):
    """Options for a single request (method, headers, cache directive, body).

    ``cache`` follows the fetch() vocabulary (``"no-store"``,
    ``"no-cache"``, ``"default"`` ...). ``None`` means "not set by the
    caller", which lets callers pick their own default.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    method: str = "GET"
    headers: httpx.Headers = Field(default_factory=httpx.Headers)
    cache: str | None = None
    body: bytes | str | None = None

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_headers(cls, value: Any) -> httpx.Headers:
        return merge_headers(value)


FetchLike = Callable[[str, RequestInit], Awaitable[httpx.Response]]


def merge_headers(*sources: HeadersInput) -> httpx.Headers:
    """Merge header sources case-insensitively; later sources win.

    Args:
        *sources: Mappings, ``httpx.Headers``, lists of pairs, or ``None``.

    Returns:
        A fresh ``httpx.Headers`` instance.
    """
    merged = httpx.Headers()
    for source in sources:
        if not source:
            continue
        for key, value in httpx.Headers(source).items():
            merged[key] = value
    return merged


class HttpxFetch:
    """Default ``FetchLike`` built on ``httpx.AsyncClient``.

    With an injected ``client`` every request reuses it (the caller owns
    its lifecycle). Used as an async context manager without one, it opens
    a shared client on entry and closes it on exit. Otherwise a
    short-lived client is opened per request.

    Args:
        client: Optional shared async client.
        timeout: Timeout in seconds for clients this object creates.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._client = client
        self._owns_client = False
        self.timeout = timeout

    async def __aenter__(self) -> HttpxFetch:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    async def __call__(self, url: str, init: RequestInit) -> httpx.Response:
        headers = merge_headers(init.headers)
        cache_control = _CACHE_CONTROL.get(init.cache or "")
        if cache_control and "Cache-Control" not in headers:
            headers["Cache-Control"] = cache_control

        logger.debug("%s %s", init.method, url)

        if self._client is not None:
            return await self._client.request(
                init.method, url, headers=headers, content=init.body
            )

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.request(
                init.method, url, headers=headers, content=init.body
            )


def get_fetch(
    fetch: FetchLike | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> FetchLike:
    """Return the caller's fetch callable or a default ``HttpxFetch``."""
    if fetch is not None:
        return fetch
    return HttpxFetch(timeout=timeout)
