"""JSON:API document models using Pydantic v2.

Only the subset of the JSON:API format this client consumes is modelled:
resources with type/id/attributes/relationships, relationship linkage
(single, multiple, or empty) and the top-level document with its
side-loaded ``included`` array. Unknown members are preserved but never
validated.

Attribute values are free-form JSON. The ``attr_*`` helpers read them
defensively and return ``None`` on a type mismatch instead of raising.

Reference: https://jsonapi.org/format/
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")


# ---------------------------------------------------------------------------
# Resources and linkage
# ---------------------------------------------------------------------------


class ResourceIdentifier(_Frozen):
    """A ``{type, id}`` reference, optionally with inline ``meta``.

    Drupal puts image ``alt``/``title``/``width``/``height`` in ``meta``.
    """

    type: str
    id: str
    meta: dict[str, JsonValue] | None = None


class JsonApiRelationship(_Frozen):
    """A relationship object: single linkage, multiple linkage, or none."""

    data: ResourceIdentifier | list[ResourceIdentifier] | None = None
    links: dict[str, Any] | None = None

    def references(self) -> list[ResourceIdentifier]:
        """Return the linkage as a list (a single reference becomes one item)."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return list(self.data)
        return [self.data]


class JsonApiResource(_Frozen):
    """A single JSON:API resource object."""

    type: str
    id: str
    attributes: dict[str, JsonValue] | None = None
    relationships: dict[str, JsonApiRelationship] | None = None
    links: dict[str, Any] | None = None

    def relationship(self, name: str) -> JsonApiRelationship | None:
        """Return the named relationship, or ``None`` when absent."""
        if not self.relationships:
            return None
        return self.relationships.get(name)


class JsonApiDocument(_Frozen):
    """Top-level JSON:API document with primary data and ``included``."""

    data: JsonApiResource | list[JsonApiResource] | None = None
    included: list[JsonApiResource] = Field(default_factory=list)
    links: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None

    def resources(self) -> list[JsonApiResource]:
        """Return the primary data as a list."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return list(self.data)
        return [self.data]


# ---------------------------------------------------------------------------
# Fail-soft attribute access
# ---------------------------------------------------------------------------


def attr_str(attrs: Mapping[str, Any] | None, key: str) -> str | None:
    """Return ``attrs[key]`` if it is a string, else ``None``."""
    if not attrs:
        return None
    value = attrs.get(key)
    return value if isinstance(value, str) else None


def attr_int(attrs: Mapping[str, Any] | None, key: str) -> int | None:
    """Return ``attrs[key]`` if it is an integral number, else ``None``."""
    if not attrs:
        return None
    value = attrs.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def attr_map(attrs: Mapping[str, Any] | None, key: str) -> Mapping[str, Any] | None:
    """Return ``attrs[key]`` if it is a nested mapping, else ``None``."""
    if not attrs:
        return None
    value = attrs.get(key)
    return value if isinstance(value, Mapping) else None
