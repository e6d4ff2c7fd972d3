"""Normalized, renderable media descriptors."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from drupal_headless.schemas.jsonapi import JsonApiResource

MediaKind = Literal["image", "video", "remote_video", "file", "audio", "unknown"]


class ImageData(BaseModel):
    """Image fields needed to render an ``<img>``."""

    model_config = ConfigDict(frozen=True)

    src: str
    alt: str = ""
    width: int | None = None
    height: int | None = None
    title: str | None = None


class MediaDescriptor(BaseModel):
    """A CMS media entity classified into one renderable kind.

    ``url`` is absolute (http(s), ``data:``, or protocol-relative rewritten
    to https) or ``None`` when the file could not be resolved.
    ``resource`` points back at the raw media resource.
    """

    model_config = ConfigDict(frozen=True)

    kind: MediaKind = "unknown"
    name: str = ""
    url: str | None = None
    image: ImageData | None = None
    mime_type: str | None = None
    embed_url: str | None = None
    resource: JsonApiResource
