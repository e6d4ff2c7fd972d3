"""High-level async client bundling all CMS services.

Usage::

    async with DrupalClient(ClientConfig(base_url="https://cms.example.com")) as drupal:
        async for route in drupal.routes.iterate():
            ...
        doc = await drupal.fetch_jsonapi(route.jsonapi_url)

Inside the ``async with`` block all requests share one
``httpx.AsyncClient``. Without it, each request opens its own client.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from drupal_headless.config import ClientConfig, default_client_config
from drupal_headless.media import Included, extract_media, extract_primary_image
from drupal_headless.schemas.jsonapi import JsonApiDocument, JsonApiResource
from drupal_headless.schemas.media import ImageData, MediaDescriptor
from drupal_headless.schemas.resolve import ResolveResponse
from drupal_headless.services.jsonapi_service import JsonApiService
from drupal_headless.services.resolve_service import ResolveService
from drupal_headless.services.routes_service import RoutesService
from drupal_headless.transport import FetchLike, HttpxFetch

logger = logging.getLogger(__name__)


class DrupalClient:
    """Facade over the routes, resolve and JSON:API services.

    Args:
        config: Explicit configuration. Defaults to the environment
            (``DRUPAL_BASE_URL``, ``DRUPAL_ROUTES_SECRET``).
        fetch: Custom transport callable. Takes precedence over ``client``.
        client: Shared ``httpx.AsyncClient`` owned by the caller.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        fetch: FetchLike | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config if config is not None else default_client_config()
        self._http = HttpxFetch(client, timeout=self.config.timeout)
        transport = fetch if fetch is not None else self._http

        self.routes = RoutesService(self.config, fetch=transport)
        self.resolver = ResolveService(self.config, fetch=transport)
        self.jsonapi = JsonApiService(self.config, fetch=transport)

    async def __aenter__(self) -> DrupalClient:
        await self._http.__aenter__()
        logger.debug("Drupal client opened for %s", self.config.base_url)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._http.__aexit__(exc_type, exc, tb)

    async def resolve_path(self, path: str, **options: Any) -> ResolveResponse:
        """Resolve one site path. See ``ResolveService.resolve_path``."""
        return await self.resolver.resolve_path(path, **options)

    async def fetch_jsonapi(self, url: str, **options: Any) -> JsonApiDocument:
        """Fetch a JSON:API document. See ``JsonApiService.fetch_jsonapi``."""
        return await self.jsonapi.fetch_jsonapi(url, **options)

    async def fetch_view(self, url: str, **options: Any) -> dict[str, Any]:
        """Fetch view data. See ``JsonApiService.fetch_view``."""
        return await self.jsonapi.fetch_view(url, **options)

    def extract_media(
        self,
        media: JsonApiResource | None,
        included: Included,
    ) -> MediaDescriptor | None:
        """Classify a media resource against this client's origin."""
        return extract_media(media, included, base_url=self.config.base_url)

    def extract_primary_image(
        self,
        entity: JsonApiResource,
        included: Included,
    ) -> ImageData | None:
        """Return the entity's primary image against this client's origin."""
        return extract_primary_image(entity, included, base_url=self.config.base_url)
