"""Routes feed pagination service.

Walks the secret-protected build-time routes feed (``/jsonapi/routes``)
by following the server's ``links.next`` cursor. Pages are fetched
strictly one after another; ``next`` links must stay on the configured
origin and the walk is capped at ``max_pages`` pages.

Malformed feed items are dropped one by one and never fail a page.
Everything structural (HTTP failure, non-JSON body, missing ``data``,
cross-origin ``next``, runaway pagination) raises.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

from pydantic import ValidationError

from drupal_headless.config import default_client_config
from drupal_headless.errors import (
    FeedFormatError,
    FeedRequestError,
    PaginationOverrunError,
)
from drupal_headless.schemas.pagination import parse_pagination_links
from drupal_headless.schemas.routes import RouteEntry, RoutesPage
from drupal_headless.services.base import BaseService
from drupal_headless.transport import FetchLike, HeadersInput, RequestInit
from drupal_headless.urls import resolve_url

logger = logging.getLogger(__name__)

ROUTES_PATH = "/jsonapi/routes"
ROUTES_SECRET_HEADER = "X-Routes-Secret"
DEFAULT_PAGE_LIMIT = 50
DEFAULT_MAX_PAGES = 10_000


def normalize_route_item(value: Any) -> RouteEntry | None:
    """Validate one raw feed item.

    Returns:
        The ``RouteEntry``, or ``None`` if the item is not an object, its
        path is empty or relative, its kind is unknown, or its URL fields
        do not agree with its kind.
    """
    if not isinstance(value, dict):
        return None
    try:
        return RouteEntry.model_validate(value)
    except ValidationError:
        return None


class RoutesService(BaseService):
    """Cursor-following client for the routes feed.

    Args:
        config: Base origin and optional routes secret.
        fetch: Transport callable; defaults to ``HttpxFetch``.
    """

    request_error = FeedRequestError

    def _first_page_url(self, limit: int, langcode: str | None) -> str:
        params = {"_format": "json", "page[limit]": str(limit)}
        if langcode:
            params["langcode"] = langcode
        url = resolve_url(ROUTES_PATH, self.config.base_url)
        return str(url.copy_merge_params(params))

    def _feed_init(
        self,
        headers: HeadersInput,
        init: RequestInit | None,
    ) -> RequestInit:
        secret = self.config.secret_value()
        # The feed is secret-protected; do not cache unless asked to.
        return self._request_init(
            headers,
            init,
            extra={ROUTES_SECRET_HEADER: secret} if secret else None,
            no_store=True,
        )

    async def fetch_page(
        self,
        *,
        url: str | None = None,
        limit: int = DEFAULT_PAGE_LIMIT,
        langcode: str | None = None,
        headers: HeadersInput = None,
        init: RequestInit | None = None,
    ) -> RoutesPage:
        """Fetch and normalize a single feed page.

        Args:
            url: Pagination URL (usually ``links.next`` of a previous page).
                Takes precedence over ``limit``/``langcode`` and is fetched
                as-is once it passes the origin check.
            limit: Page size for the first request (``page[limit]``).
            langcode: Optional language filter for the first request.
            headers: Extra request headers; override ``init.headers``.
            init: Base request options.

        Returns:
            The normalized page.

        Raises:
            OriginMismatchError: If ``url`` points at another origin.
            UnsupportedSchemeError: If ``url`` is not http(s).
            FeedRequestError: On a non-success HTTP status.
            FeedFormatError: If the body is not an object with a ``data`` list.
        """
        if url:
            request_url = str(resolve_url(url, self.config.base_url))
        else:
            request_url = self._first_page_url(limit, langcode)

        logger.debug("Fetching routes feed page: %s", request_url)
        doc = await self._get_json(request_url, self._feed_init(headers, init))

        if not isinstance(doc, dict):
            raise FeedFormatError("Routes feed returned invalid JSON")

        raw_items = doc.get("data")
        if not isinstance(raw_items, list):
            raise FeedFormatError("Routes feed document has no 'data' array")

        items = [
            entry
            for entry in (normalize_route_item(raw) for raw in raw_items)
            if entry is not None
        ]
        dropped = len(raw_items) - len(items)
        if dropped:
            logger.debug("Dropped %d malformed routes feed item(s)", dropped)

        meta = doc.get("meta")
        return RoutesPage(
            data=tuple(items),
            links=parse_pagination_links(doc.get("links")),
            meta=meta if isinstance(meta, dict) else None,
        )

    async def iterate(
        self,
        *,
        limit: int = DEFAULT_PAGE_LIMIT,
        langcode: str | None = None,
        max_pages: int = DEFAULT_MAX_PAGES,
        headers: HeadersInput = None,
        init: RequestInit | None = None,
    ) -> AsyncIterator[RouteEntry]:
        """Yield every route, following ``links.next`` until it is absent.

        Pages are fetched one at a time, only when the consumer asks for
        the first item of the next page. Stopping early (``break`` or
        ``aclose()``) issues no further requests.

        Raises:
            PaginationOverrunError: If ``max_pages`` pages were read and the
                last one still had a ``next`` link.
        """
        if max_pages < 1:
            raise ValueError(f"max_pages must be at least 1, got {max_pages}")

        page_url: str | None = None
        for page_number in range(1, max_pages + 1):
            page = await self.fetch_page(
                url=page_url,
                limit=limit,
                langcode=langcode,
                headers=headers,
                init=init,
            )

            for item in page.data:
                yield item

            if not page.next:
                logger.debug("Routes feed exhausted after %d page(s)", page_number)
                return
            page_url = page.next

        raise PaginationOverrunError(max_pages)

    async def collect_all(
        self,
        *,
        limit: int = DEFAULT_PAGE_LIMIT,
        langcode: str | None = None,
        max_pages: int = DEFAULT_MAX_PAGES,
        headers: HeadersInput = None,
        init: RequestInit | None = None,
    ) -> list[RouteEntry]:
        """Collect every route into a list (eager wrapper around ``iterate``)."""
        return [
            item
            async for item in self.iterate(
                limit=limit,
                langcode=langcode,
                max_pages=max_pages,
                headers=headers,
                init=init,
            )
        ]


# ---------------------------------------------------------------------------
# Module-level conveniences (configuration resolved from the environment)
# ---------------------------------------------------------------------------


def _service(
    base_url: str | None,
    secret: str | None,
    fetch: FetchLike | None,
) -> RoutesService:
    return RoutesService(default_client_config(base_url, secret), fetch=fetch)


async def fetch_routes_page(
    *,
    base_url: str | None = None,
    secret: str | None = None,
    fetch: FetchLike | None = None,
    **options: Any,
) -> RoutesPage:
    """Fetch one routes feed page. See ``RoutesService.fetch_page``."""
    return await _service(base_url, secret, fetch).fetch_page(**options)


async def iterate_routes(
    *,
    base_url: str | None = None,
    secret: str | None = None,
    fetch: FetchLike | None = None,
    **options: Any,
) -> AsyncIterator[RouteEntry]:
    """Iterate all routes. See ``RoutesService.iterate``."""
    async for item in _service(base_url, secret, fetch).iterate(**options):
        yield item


async def collect_routes(
    *,
    base_url: str | None = None,
    secret: str | None = None,
    fetch: FetchLike | None = None,
    **options: Any,
) -> list[RouteEntry]:
    """Collect all routes. See ``RoutesService.collect_all``."""
    return await _service(base_url, secret, fetch).collect_all(**options)
