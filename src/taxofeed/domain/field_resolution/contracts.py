"""Typed inputs and outputs of relation-field resolution.

This module intentionally holds only:
- the per-call configuration values populated at the pipeline boundary
- the ``ResolutionOutcome`` union handed back to the caller
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Final, Literal

from taxofeed.config.imports import DEFAULT_DATA_DELIMITER
from taxofeed.domain.model import MatchAttribute

if TYPE_CHECKING:
    from collections.abc import Mapping

    from taxofeed.domain.model import Identifier, RawScalar

USE_DEFAULT_NODE: Final[str] = "usedefault"

type RawValue = tuple[RawScalar, ...]
type FeedRow = Mapping[str, object]


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldConfig:
    """Settings of the relation field being populated."""

    handle: str
    source: str | None
    maintain_hierarchy: bool = False
    branch_limit: int | None = None
    max_relations: int | None = None
    target_site_uid: str | None = None

    @property
    def limit(self) -> int | None:
        """Branch limit for structure-maintaining fields, relation limit otherwise."""
        return self.branch_limit if self.maintain_hierarchy else self.max_relations


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldInfo:
    """How the feed maps onto the field for one feed/field pairing."""

    node: str | None
    default: tuple[Identifier, ...] = ()
    match_strategy: str = MatchAttribute.TITLE
    allow_create: bool = False
    sub_fields: Mapping[str, object] | None = None

    @property
    def uses_default(self) -> bool:
        return self.node == USE_DEFAULT_NODE


@dataclass(frozen=True, slots=True, kw_only=True)
class FeedContext:
    row_id: int | str
    site_id: int | None = None
    update_search_indexes: bool = True
    compare_content: bool = True
    data_delimiter: str = DEFAULT_DATA_DELIMITER


@dataclass(frozen=True, slots=True)
class ExtractedValue:
    """``value is None`` means the mapped node does not occur in the row at all."""

    value: RawValue | None
    default: tuple[Identifier, ...]

    @property
    def is_absent(self) -> bool:
        return self.value is None


@dataclass(slots=True)
class LookupResult:
    found: list[Identifier] = field(default_factory=list)
    node_key: int | None = None


class OutcomeKind(StrEnum):
    NOOP = "noop"
    IDENTIFIERS = "identifiers"


@dataclass(frozen=True, slots=True)
class NoOp:
    """Leave the relations currently stored on the element untouched."""

    kind: Literal[OutcomeKind.NOOP] = OutcomeKind.NOOP


@dataclass(frozen=True, slots=True)
class IdentifierList:
    """Replace the stored relations with ``ids``; an empty tuple clears them."""

    ids: tuple[Identifier, ...]
    kind: Literal[OutcomeKind.IDENTIFIERS] = OutcomeKind.IDENTIFIERS


type ResolutionOutcome = NoOp | IdentifierList

NO_OP: Final[NoOp] = NoOp()
