"""Services talking to the CMS over the injected transport."""

from drupal_headless.services.base import BaseService
from drupal_headless.services.jsonapi_service import JsonApiService
from drupal_headless.services.resolve_service import ResolveService
from drupal_headless.services.routes_service import (
    RoutesService,
    collect_routes,
    fetch_routes_page,
    iterate_routes,
    normalize_route_item,
)

__all__ = [
    "BaseService",
    "JsonApiService",
    "ResolveService",
    "RoutesService",
    "collect_routes",
    "fetch_routes_page",
    "iterate_routes",
    "normalize_route_item",
]
