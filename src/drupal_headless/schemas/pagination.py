"""Pagination link models for cursor-following feeds.

The server owns the cursor: each page hands out an opaque ``links.next``
URL and the client follows it verbatim (after the origin check).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PaginationLinks(BaseModel):
    """Pagination links of a feed page.

    ``next`` is either a non-empty string or ``None`` (last page).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    self_: str | None = Field(default=None, alias="self")
    next: str | None = None


def _link_string(value: Any) -> str | None:
    return value if isinstance(value, str) and value.strip() != "" else None


def parse_pagination_links(links: Any) -> PaginationLinks:
    """Extract ``self``/``next`` from a raw ``links`` member.

    Anything but a non-empty string yields ``None`` for that link; a
    missing or malformed ``links`` member yields an empty ``PaginationLinks``.
    """
    if not isinstance(links, Mapping):
        return PaginationLinks()
    return PaginationLinks(
        self_=links.get("self") if isinstance(links.get("self"), str) else None,
        next=_link_string(links.get("next")),
    )
