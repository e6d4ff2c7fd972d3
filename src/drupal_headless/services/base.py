"""Shared plumbing for services that talk to the CMS.

Holds the configuration and the injected transport, builds request
options (default ``Accept`` header, cache directive) and turns responses
into parsed JSON or typed errors. No retries happen here.
"""

from __future__ import annotations

import logging
from typing import Any

from drupal_headless.config import ClientConfig
from drupal_headless.errors import FeedFormatError, RequestFailedError
from drupal_headless.transport import (
    FetchLike,
    HeadersInput,
    RequestInit,
    get_fetch,
    merge_headers,
)

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
JSONAPI_MEDIA_TYPE = "application/vnd.api+json"

_CREDENTIAL_HEADERS = ("Authorization", "Cookie")


class BaseService:
    """Base class for CMS-facing services.

    Args:
        config: Base origin, optional routes secret and timeout.
        fetch: Transport callable; defaults to ``HttpxFetch``.
    """

    request_error: type[RequestFailedError] = RequestFailedError
    accept: str = JSONAPI_MEDIA_TYPE

    def __init__(self, config: ClientConfig, fetch: FetchLike | None = None) -> None:
        self.config = config
        self._fetch = get_fetch(fetch, timeout=config.timeout)

    def _request_init(
        self,
        headers: HeadersInput = None,
        init: RequestInit | None = None,
        *,
        extra: HeadersInput = None,
        accept: str | None = None,
        no_store: bool = False,
    ) -> RequestInit:
        """Merge caller options with defaults.

        ``Accept`` defaults to ``accept`` or the service's media type.
        ``extra`` headers are applied last. The cache directive defaults to
        ``no-store`` when ``no_store`` is set or the request carries
        credentials; a caller-supplied directive always wins.
        """
        merged = merge_headers(init.headers if init else None, headers)
        if "Accept" not in merged:
            merged["Accept"] = accept or self.accept
        for key, value in merge_headers(extra).items():
            merged[key] = value

        cache = init.cache if init is not None else None
        if cache is None and (no_store or any(h in merged for h in _CREDENTIAL_HEADERS)):
            cache = "no-store"

        return RequestInit(
            method=init.method if init else "GET",
            headers=merged,
            cache=cache,
            body=init.body if init else None,
        )

    async def _get_json(self, url: str, init: RequestInit) -> Any:
        """Send the request and return the decoded JSON body.

        Raises:
            RequestFailedError: On a non-success status (``request_error``
                subclass for the concrete service).
            FeedFormatError: If the body is not valid JSON.
        """
        response = await self._fetch(url, init)

        if not response.is_success:
            logger.debug("%s %s -> %s", init.method, url, response.status_code)
            raise self.request_error(
                response.status_code, response.reason_phrase, url
            )

        try:
            return response.json()
        except ValueError as exc:
            raise FeedFormatError(
                f"{self.request_error.label} returned invalid JSON"
            ) from exc
