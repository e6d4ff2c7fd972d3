"""Pydantic v2 model for the single-path resolve endpoint."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class ResolvedEntity(BaseModel):
    """The entity a path resolved to."""

    model_config = ConfigDict(frozen=True)

    type: str
    id: str
    langcode: str


class Redirect(BaseModel):
    """A redirect registered for the requested path."""

    model_config = ConfigDict(frozen=True)

    to: str
    status: int | None = None


class ResolveResponse(BaseModel):
    """Result of resolving one site path.

    Unresolved paths come back with ``resolved=False`` and every other
    field empty (a redirect may still be present).
    """

    model_config = ConfigDict(frozen=True)

    resolved: bool
    kind: Literal["entity", "view"] | None = None
    canonical: str | None = None
    entity: ResolvedEntity | None = None
    redirect: Redirect | None = None
    jsonapi_url: str | None = None
    data_url: str | None = None
    headless: bool = False
    drupal_url: str | None = None
