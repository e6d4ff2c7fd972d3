"""Fetching JSON:API documents and view data.

URLs usually come from the routes feed or the resolver (``jsonapi_url`` /
``data_url``); they are checked against the configured origin before any
request is sent. Cross-origin fetches must be requested explicitly.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from drupal_headless.errors import FeedFormatError
from drupal_headless.schemas.jsonapi import JsonApiDocument
from drupal_headless.services.base import JSON_MEDIA_TYPE, BaseService
from drupal_headless.transport import HeadersInput, RequestInit
from drupal_headless.urls import resolve_url

logger = logging.getLogger(__name__)


class JsonApiService(BaseService):
    """Client for JSON:API resources and view data endpoints."""

    async def fetch_jsonapi(
        self,
        url: str,
        *,
        allow_cross_origin: bool = False,
        headers: HeadersInput = None,
        init: RequestInit | None = None,
    ) -> JsonApiDocument:
        """Fetch a JSON:API document.

        Args:
            url: Absolute or relative JSON:API URL.
            allow_cross_origin: Permit a URL on another origin.
            headers: Extra request headers.
            init: Base request options.

        Raises:
            OriginMismatchError: If ``url`` is cross-origin and not allowed.
            RequestFailedError: On a non-success HTTP status.
            FeedFormatError: If the body is not a JSON:API document.
        """
        request_url = str(
            resolve_url(url, self.config.base_url, allow_cross_origin=allow_cross_origin)
        )
        doc = await self._get_json(request_url, self._request_init(headers, init))

        if not isinstance(doc, dict):
            raise FeedFormatError(f"JSON:API response is not an object: {request_url}")
        try:
            return JsonApiDocument.model_validate(doc)
        except ValidationError as exc:
            raise FeedFormatError(f"Invalid JSON:API document: {request_url}") from exc

    async def fetch_view(
        self,
        url: str,
        *,
        allow_cross_origin: bool = False,
        headers: HeadersInput = None,
        init: RequestInit | None = None,
    ) -> dict[str, Any]:
        """Fetch the JSON payload behind a view route's ``data_url``.

        The payload shape is defined by the view, so it is returned as-is.
        """
        request_url = str(
            resolve_url(url, self.config.base_url, allow_cross_origin=allow_cross_origin)
        )
        doc = await self._get_json(
            request_url, self._request_init(headers, init, accept=JSON_MEDIA_TYPE)
        )

        if not isinstance(doc, dict):
            raise FeedFormatError(f"View response is not an object: {request_url}")
        logger.debug("Fetched view data: %s", request_url)
        return doc
