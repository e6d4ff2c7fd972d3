"""Extraction of ``<drupal-media>`` embeds from rich-text HTML."""

from __future__ import annotations

_TAG_START = "<drupal-media"
_UUID_ATTR = "data-entity-uuid="


def parse_drupal_media_tag(tag: str) -> str | None:
    """Return the ``data-entity-uuid`` value of a single tag, if any.

    Single and double quotes are accepted, as is whitespace after ``=``.
    Unquoted or unterminated values yield ``None``.
    """
    start = tag.find(_UUID_ATTR)
    if start == -1:
        return None

    index = start + len(_UUID_ATTR)
    while index < len(tag) and tag[index].isspace():
        index += 1

    if index >= len(tag) or tag[index] not in ("'", '"'):
        return None
    quote = tag[index]

    end = tag.find(quote, index + 1)
    if end == -1:
        return None

    return tag[index + 1 : end] or None


def extract_embedded_media_uuids(html: str) -> list[str]:
    """Return the UUIDs of all embedded media, in document order.

    Duplicates are kept. Tags without a usable UUID are skipped; an
    unterminated tag ends the scan.
    """
    uuids: list[str] = []
    index = 0

    while index < len(html):
        start = html.find(_TAG_START, index)
        if start == -1:
            break

        end = html.find(">", start)
        if end == -1:
            break

        uuid = parse_drupal_media_tag(html[start : end + 1])
        if uuid:
            uuids.append(uuid)

        index = end + 1

    return uuids
