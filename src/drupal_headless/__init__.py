"""Async data-access layer for a headless Drupal JSON:API surface."""

from drupal_headless.client import DrupalClient
from drupal_headless.config import (
    ClientConfig,
    Settings,
    default_client_config,
    get_base_url,
    get_settings,
)
from drupal_headless.embeds import extract_embedded_media_uuids, parse_drupal_media_tag
from drupal_headless.errors import (
    ConfigError,
    DrupalHeadlessError,
    FeedFormatError,
    FeedRequestError,
    OriginMismatchError,
    PaginationOverrunError,
    RequestFailedError,
    UnsupportedSchemeError,
)
from drupal_headless.media import (
    extract_image_from_file,
    extract_media,
    extract_media_field,
    extract_primary_image,
    find_included,
    find_included_by_relationship,
    find_included_by_relationship_multiple,
)
from drupal_headless.schemas import (
    ImageData,
    JsonApiDocument,
    JsonApiRelationship,
    JsonApiResource,
    MediaDescriptor,
    ResolveResponse,
    RouteEntry,
    RoutesPage,
)
from drupal_headless.services import (
    RoutesService,
    collect_routes,
    fetch_routes_page,
    iterate_routes,
)
from drupal_headless.transport import FetchLike, HttpxFetch, RequestInit
from drupal_headless.urls import (
    get_file_url,
    get_image_style_url,
    resolve_file_url,
    resolve_url,
)

__all__ = [
    "ClientConfig",
    "ConfigError",
    "DrupalClient",
    "DrupalHeadlessError",
    "FeedFormatError",
    "FeedRequestError",
    "FetchLike",
    "HttpxFetch",
    "ImageData",
    "JsonApiDocument",
    "JsonApiRelationship",
    "JsonApiResource",
    "MediaDescriptor",
    "OriginMismatchError",
    "PaginationOverrunError",
    "RequestFailedError",
    "RequestInit",
    "ResolveResponse",
    "RouteEntry",
    "RoutesPage",
    "RoutesService",
    "Settings",
    "UnsupportedSchemeError",
    "collect_routes",
    "default_client_config",
    "extract_embedded_media_uuids",
    "extract_image_from_file",
    "extract_media",
    "extract_media_field",
    "extract_primary_image",
    "fetch_routes_page",
    "find_included",
    "find_included_by_relationship",
    "find_included_by_relationship_multiple",
    "get_base_url",
    "get_file_url",
    "get_image_style_url",
    "get_settings",
    "iterate_routes",
    "parse_drupal_media_tag",
    "resolve_file_url",
    "resolve_url",
]
