"""Taxonomy aggregates: sites, groups, nodes and the registries around them."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Final

from taxofeed.domain.model.entity import Entity

FIELD_COLUMN_PREFIX: Final[str] = "field_"

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Return an ASCII, dash-separated slug for ``text``."""

    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _SLUG_SEPARATORS.sub("-", folded.lower()).strip("-")


@dataclass(eq=False, kw_only=True)
class Site(Entity):
    uid: str
    handle: str
    name: str
    primary: bool = False


@dataclass(eq=False, kw_only=True)
class TaxonomyGroup(Entity):
    """A named category group; nodes of one group form one structure."""

    uid: str
    handle: str
    name: str


@dataclass(eq=False, kw_only=True)
class TaxonomyNode(Entity):
    """A hierarchical category entry.

    ``level`` is 1 for roots; the store derives it from the parent on creation.
    """

    title: str
    group_id: int | None = None
    site_id: int | None = None
    parent_id: int | None = None
    slug: str | None = None
    level: int = 1

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass(eq=False, kw_only=True)
class CustomField(Entity):
    """A user-defined field whose values live in a dedicated storage column."""

    handle: str
    name: str

    @property
    def column_name(self) -> str:
        return f"{FIELD_COLUMN_PREFIX}{self.handle}"


@dataclass(eq=False, kw_only=True)
class SourceDefinition(Entity):
    """A named, condition-filtered view over the taxonomy (``custom:<key>``)."""

    key: str
    label: str
    condition: dict[str, object] = field(default_factory=dict)
