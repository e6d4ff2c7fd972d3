"""Single-path resolution (``/jsonapi/resolve``).

One request, one answer: tells whether a site path maps to an entity
(with its JSON:API URL) or a view (with its data URL), plus canonical
path and redirect information.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from drupal_headless.errors import FeedFormatError
from drupal_headless.schemas.resolve import ResolveResponse
from drupal_headless.services.base import JSON_MEDIA_TYPE, BaseService
from drupal_headless.transport import HeadersInput, RequestInit
from drupal_headless.urls import resolve_url

logger = logging.getLogger(__name__)

RESOLVE_PATH = "/jsonapi/resolve"


class ResolveService(BaseService):
    """Client for the path resolver endpoint."""

    accept = JSON_MEDIA_TYPE

    async def resolve_path(
        self,
        path: str,
        *,
        langcode: str | None = None,
        headers: HeadersInput = None,
        init: RequestInit | None = None,
    ) -> ResolveResponse:
        """Resolve a site path such as ``/about-us``.

        Args:
            path: Site path; a leading slash is added if missing.
            langcode: Optional language of the path.
            headers: Extra request headers.
            init: Base request options.

        Raises:
            RequestFailedError: On a non-success HTTP status.
            FeedFormatError: If the body is not a resolve response.
        """
        if not path.startswith("/"):
            path = f"/{path}"

        params = {"path": path, "_format": "json"}
        if langcode:
            params["langcode"] = langcode
        url = str(resolve_url(RESOLVE_PATH, self.config.base_url).copy_merge_params(params))

        logger.debug("Resolving path %s", path)
        doc = await self._get_json(url, self._request_init(headers, init))

        try:
            return ResolveResponse.model_validate(doc)
        except ValidationError as exc:
            raise FeedFormatError(f"Invalid resolve response for {path}") from exc
