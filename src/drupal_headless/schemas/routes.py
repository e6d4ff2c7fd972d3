"""Pydantic v2 models for the build-time routes feed (``/jsonapi/routes``)."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, model_validator

from drupal_headless.schemas.pagination import PaginationLinks

RouteKind = Literal["entity", "view"]


class RouteEntry(BaseModel):
    """A single routed path.

    ``entity`` routes carry ``jsonapi_url``; ``view`` routes carry
    ``data_url``. Exactly one of the two is set.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    kind: RouteKind
    jsonapi_url: str | None = None
    data_url: str | None = None

    @model_validator(mode="after")
    def _kind_matches_url(self) -> RouteEntry:
        if not self.path.strip() or not self.path.startswith("/"):
            raise ValueError("path must be non-empty and start with '/'")
        if self.kind == "entity":
            if not _non_blank(self.jsonapi_url) or self.data_url is not None:
                raise ValueError("entity routes need jsonapi_url and no data_url")
        elif not _non_blank(self.data_url) or self.jsonapi_url is not None:
            raise ValueError("view routes need data_url and no jsonapi_url")
        return self


def _non_blank(value: str | None) -> bool:
    return isinstance(value, str) and value.strip() != ""


class RoutesPage(BaseModel):
    """One page of the routes feed."""

    model_config = ConfigDict(frozen=True)

    data: tuple[RouteEntry, ...] = ()
    links: PaginationLinks = PaginationLinks()
    meta: dict[str, Any] | None = None

    @property
    def next(self) -> str | None:
        """Cursor URL of the following page, or ``None`` on the last page."""
        return self.links.next
