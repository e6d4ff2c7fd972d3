"""JSON:API resource-graph normalizer for Drupal media.

Resolves relationship linkage against a document's ``included`` array and
turns ``media--*`` resources into ``MediaDescriptor`` objects of a closed
set of kinds. Everything here is pure and synchronous.

Missing data is expected (callers often under-fetch ``included``): an
unresolved file leaves ``url`` empty, an unsupported bundle becomes an
``unknown`` descriptor, and nothing in this module raises for content
problems.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from drupal_headless.errors import ConfigError
from drupal_headless.schemas.jsonapi import (
    JsonApiRelationship,
    JsonApiResource,
    attr_int,
    attr_str,
)
from drupal_headless.schemas.media import ImageData, MediaDescriptor, MediaKind
from drupal_headless.urls import get_file_url

Included = Sequence[JsonApiResource] | None

PRIMARY_IMAGE_FIELDS = (
    "field_image",
    "field_media_image",
    "field_media",
    "field_thumbnail",
    "field_hero_image",
)

_YOUTUBE_ID = re.compile(r"(?:youtube\.com/(?:watch\?v=|embed/)|youtu\.be/)([a-zA-Z0-9_-]+)")
_VIMEO_ID = re.compile(r"vimeo\.com/(\d+)")


# ---------------------------------------------------------------------------
# Relationship resolution
# ---------------------------------------------------------------------------


def find_included(included: Included, type: str, id: str) -> JsonApiResource | None:
    """Find a resource in ``included`` by ``(type, id)``; first match wins."""
    if not included:
        return None
    for resource in included:
        if resource.type == type and resource.id == id:
            return resource
    return None


def find_included_by_relationship(
    included: Included,
    relationship: JsonApiRelationship | None,
) -> JsonApiResource | None:
    """Resolve a single-valued relationship.

    Returns ``None`` for absent, empty, or multi-valued linkage.
    """
    if relationship is None or relationship.data is None:
        return None
    if isinstance(relationship.data, list):
        return None
    return find_included(included, relationship.data.type, relationship.data.id)


def find_included_by_relationship_multiple(
    included: Included,
    relationship: JsonApiRelationship | None,
) -> list[JsonApiResource]:
    """Resolve every reference of a relationship, in declared order.

    A single reference counts as a one-element list. References that are
    not in ``included`` are dropped.
    """
    if relationship is None:
        return []
    resolved = []
    for ref in relationship.references():
        resource = find_included(included, ref.type, ref.id)
        if resource is not None:
            resolved.append(resource)
    return resolved


def _relationship_meta_string(
    relationship: JsonApiRelationship | None,
    key: str,
) -> str | None:
    if relationship is None or relationship.data is None:
        return None
    if isinstance(relationship.data, list):
        return None
    value = attr_str(relationship.data.meta, key)
    return value if value and value.strip() else None


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _file_url(file: JsonApiResource, base_url: str | None) -> str | None:
    # Relative file URIs need a base; without one the URL stays empty.
    try:
        return get_file_url(file, base_url)
    except ConfigError:
        return None


def extract_image_from_file(
    file: JsonApiResource | None,
    base_url: str | None = None,
) -> ImageData | None:
    """Build image data from a ``file--file`` resource.

    ``alt`` falls back to the file name. Width and height are only taken
    from files that do not expose ``image_style_uri`` (their intrinsic size
    does not match the derivatives).
    """
    if file is None:
        return None

    url = _file_url(file, base_url)
    if not url:
        return None

    attrs = file.attributes
    has_styles = bool(attrs and attrs.get("image_style_uri"))
    return ImageData(
        src=url,
        alt=attr_str(attrs, "filename") or "",
        width=None if has_styles else attr_int(attrs, "width"),
        height=None if has_styles else attr_int(attrs, "height"),
    )


def get_video_embed_url(url: str) -> str | None:
    """Return a player URL for YouTube and Vimeo links, else ``None``."""
    youtube = _YOUTUBE_ID.search(url)
    if youtube:
        return f"https://www.youtube.com/embed/{youtube.group(1)}"

    vimeo = _VIMEO_ID.search(url)
    if vimeo:
        return f"https://player.vimeo.com/video/{vimeo.group(1)}"

    return None


def _image_media(
    media: JsonApiResource,
    name: str,
    included: Included,
    base_url: str | None,
) -> MediaDescriptor:
    relationship = media.relationship("field_media_image")
    file = find_included_by_relationship(included, relationship)
    image = extract_image_from_file(file, base_url)
    if image is None:
        return MediaDescriptor(kind="image", name=name, resource=media)

    alt = _relationship_meta_string(relationship, "alt")
    title = _relationship_meta_string(relationship, "title")
    image = image.model_copy(
        update={
            "alt": alt or image.alt or name,
            "title": title or image.title,
        }
    )
    return MediaDescriptor(
        kind="image", name=name, url=image.src, image=image, resource=media
    )


def _file_media(
    kind: MediaKind,
    media: JsonApiResource,
    name: str,
    relationship: JsonApiRelationship | None,
    included: Included,
    base_url: str | None,
    default_mime: str | None = None,
) -> MediaDescriptor:
    file = find_included_by_relationship(included, relationship)
    if file is None:
        return MediaDescriptor(kind=kind, name=name, resource=media)

    return MediaDescriptor(
        kind=kind,
        name=name,
        url=_file_url(file, base_url),
        mime_type=attr_str(file.attributes, "filemime") or default_mime,
        resource=media,
    )


def _remote_video_media(media: JsonApiResource, name: str) -> MediaDescriptor:
    video_url = attr_str(media.attributes, "field_media_oembed_video")
    return MediaDescriptor(
        kind="remote_video",
        name=name,
        url=video_url or None,
        embed_url=get_video_embed_url(video_url) if video_url else None,
        resource=media,
    )


def extract_media(
    media: JsonApiResource | None,
    included: Included,
    *,
    base_url: str | None = None,
) -> MediaDescriptor | None:
    """Classify a ``media--*`` resource into a ``MediaDescriptor``.

    Args:
        media: The media resource (``None`` yields ``None``).
        included: The document's ``included`` array.
        base_url: Origin used to absolutize relative file URLs. Without
            it, relative file URLs leave ``url`` empty.

    Returns:
        A descriptor for every non-``None`` input. Unsupported bundles
        come back as ``kind="unknown"``.
    """
    if media is None:
        return None

    name = attr_str(media.attributes, "name") or ""
    bundle = media.type.removeprefix("media--")

    match bundle:
        case "image":
            return _image_media(media, name, included, base_url)
        case "video":
            return _file_media(
                "video", media, name,
                media.relationship("field_media_video_file"),
                included, base_url, default_mime="video/mp4",
            )
        case "remote_video":
            return _remote_video_media(media, name)
        case "file" | "document":
            relationship = media.relationship("field_media_file")
            if relationship is None:
                relationship = media.relationship("field_media_document")
            return _file_media("file", media, name, relationship, included, base_url)
        case "audio":
            return _file_media(
                "audio", media, name,
                media.relationship("field_media_audio_file"),
                included, base_url, default_mime="audio/mpeg",
            )
        case _:
            return MediaDescriptor(kind="unknown", name=name, resource=media)


def extract_media_field(
    entity: JsonApiResource,
    field_name: str,
    included: Included,
    *,
    base_url: str | None = None,
) -> list[MediaDescriptor]:
    """Classify every media item referenced by ``entity.<field_name>``."""
    relationship = entity.relationship(field_name)
    if relationship is None:
        return []

    descriptors = []
    for media in find_included_by_relationship_multiple(included, relationship):
        descriptor = extract_media(media, included, base_url=base_url)
        if descriptor is not None:
            descriptors.append(descriptor)
    return descriptors


def extract_primary_image(
    entity: JsonApiResource,
    included: Included,
    *,
    base_url: str | None = None,
) -> ImageData | None:
    """Return the first usable image from the conventional image fields."""
    for field_name in PRIMARY_IMAGE_FIELDS:
        for media in extract_media_field(entity, field_name, included, base_url=base_url):
            if media.kind == "image" and media.image is not None:
                return media.image
    return None
