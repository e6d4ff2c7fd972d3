"""Pydantic schemas for feed pages, JSON:API documents and media."""

from drupal_headless.schemas.jsonapi import (
    JsonApiDocument,
    JsonApiRelationship,
    JsonApiResource,
    ResourceIdentifier,
    attr_int,
    attr_map,
    attr_str,
)
from drupal_headless.schemas.media import ImageData, MediaDescriptor, MediaKind
from drupal_headless.schemas.pagination import PaginationLinks, parse_pagination_links
from drupal_headless.schemas.resolve import Redirect, ResolvedEntity, ResolveResponse
from drupal_headless.schemas.routes import RouteEntry, RouteKind, RoutesPage

__all__ = [
    "ImageData",
    "JsonApiDocument",
    "JsonApiRelationship",
    "JsonApiResource",
    "MediaDescriptor",
    "MediaKind",
    "PaginationLinks",
    "Redirect",
    "ResolveResponse",
    "ResolvedEntity",
    "ResourceIdentifier",
    "RouteEntry",
    "RouteKind",
    "RoutesPage",
    "attr_int",
    "attr_map",
    "attr_str",
    "parse_pagination_links",
]
