"""URL handling: the origin guard plus file and image-style URL helpers.

``resolve_url`` is the security boundary used when following links
handed out by the CMS (pagination ``next`` links, JSON:API URLs). The file
helpers turn the many shapes Drupal uses for file URLs into absolute URLs
suitable for rendering.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

import httpx

from drupal_headless.config import normalize_base_url
from drupal_headless.errors import (
    ConfigError,
    FeedFormatError,
    OriginMismatchError,
    UnsupportedSchemeError,
)
from drupal_headless.schemas.jsonapi import attr_map

_ALLOWED_SCHEMES = ("http", "https")
_DEFAULT_PORTS = {"http": 80, "https": 443}

_STYLE_SEGMENT = re.compile(r"/styles/[^/]+/")
_FILES_MARKER = "/files/"


# ---------------------------------------------------------------------------
# Origin guard
# ---------------------------------------------------------------------------


def _origin_key(url: httpx.URL) -> tuple[str, str, int | None]:
    return url.scheme, url.host, url.port or _DEFAULT_PORTS.get(url.scheme)


def _origin(url: httpx.URL) -> str:
    origin = f"{url.scheme}://{url.host}"
    if url.port is not None:
        origin += f":{url.port}"
    return origin


def resolve_url(
    value: str,
    base: str,
    *,
    allow_cross_origin: bool = False,
) -> httpx.URL:
    """Resolve ``value`` against ``base`` and enforce the same-origin rule.

    Args:
        value: Absolute or relative URL.
        base: Absolute http(s) base URL.
        allow_cross_origin: Skip the origin check. Only the general
            resource-fetch path may set this; routes pagination never does.

    Returns:
        The resolved absolute URL.

    Raises:
        ConfigError: If ``base`` is not an absolute http(s) URL.
        FeedFormatError: If ``value`` cannot be parsed as a URL.
        UnsupportedSchemeError: If the resolved scheme is not http(s).
        OriginMismatchError: If the resolved origin differs from ``base``.
    """
    base_url = httpx.URL(normalize_base_url(base))

    try:
        url = base_url.join(value)
    except httpx.InvalidURL as exc:
        raise FeedFormatError(f"Invalid URL {value!r}: {exc}") from exc

    if url.scheme not in _ALLOWED_SCHEMES:
        raise UnsupportedSchemeError(url.scheme)

    if not allow_cross_origin and _origin_key(url) != _origin_key(base_url):
        raise OriginMismatchError(str(url), _origin(url), _origin(base_url))

    return url


# ---------------------------------------------------------------------------
# File URLs
# ---------------------------------------------------------------------------


def resolve_file_url(url: str | None, base_url: str | None = None) -> str | None:
    """Resolve a Drupal file URL to an absolute URL.

    Absolute http(s) and ``data:`` URLs are returned unchanged,
    protocol-relative URLs get an ``https:`` prefix and anything else is
    treated as a path on the CMS origin.

    Raises:
        ConfigError: If a relative path needs a base and ``base_url`` is
            missing or invalid. The environment is never consulted here.
    """
    if not url:
        return None

    if url.startswith(("http://", "https://", "data:")):
        return url

    if url.startswith("//"):
        return f"https:{url}"

    if base_url is None:
        raise ConfigError(f"A base URL is required to resolve {url!r}")
    base = normalize_base_url(base_url)
    path = url if url.startswith("/") else f"/{url}"
    return f"{base}{path}"


def get_file_url(
    file: Any,
    base_url: str | None = None,
) -> str | None:
    """Return the absolute URL of a ``file--file`` resource.

    Looks at ``attributes.uri.url``, then ``attributes.uri.value``, then
    ``attributes.url``. Accepts a ``JsonApiResource`` or a raw mapping.
    """
    if file is None:
        return None

    attrs = file.get("attributes") if isinstance(file, Mapping) else getattr(file, "attributes", None)
    if not isinstance(attrs, Mapping) or not attrs:
        return None

    uri = attr_map(attrs, "uri")
    candidates: list[Any] = []
    if uri is not None:
        candidates.extend([uri.get("url"), uri.get("value")])
    candidates.append(attrs.get("url"))

    for candidate in candidates:
        if isinstance(candidate, str) and candidate:
            return resolve_file_url(candidate, base_url)
    return None


def get_image_style_url(
    original_url: str,
    style: str,
    base_url: str | None = None,
) -> str:
    """Build the URL of an image-style derivative.

    Never raises: when the input cannot be resolved it is returned as-is,
    and URLs without a recognizable ``/files/`` structure come back
    resolved but otherwise unchanged.
    """
    try:
        resolved = resolve_file_url(original_url, base_url)
    except ConfigError:
        return original_url
    if not resolved:
        return original_url

    if "/styles/" in resolved:
        return _STYLE_SEGMENT.sub(lambda _: f"/styles/{style}/", resolved, count=1)

    marker_index = resolved.find(_FILES_MARKER)
    if marker_index != -1:
        split_at = marker_index + len(_FILES_MARKER)
        return f"{resolved[:split_at]}styles/{style}/public/{resolved[split_at:]}"

    return resolved
