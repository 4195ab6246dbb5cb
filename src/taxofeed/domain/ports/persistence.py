"""Ports for reading and writing taxonomy state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taxofeed.domain.model import (
        GroupId,
        Identifier,
        MatchCriteria,
        NodeId,
        Site,
        SiteId,
        SourceDefinition,
        TaxonomyGroup,
        TaxonomyNode,
        Uid,
        ValidationScenario,
    )


@runtime_checkable
class TaxonomyStore(Protocol):
    """Persistence contract for taxonomy nodes."""

    def find(self, criteria: MatchCriteria) -> list[NodeId]: ...

    def create(
        self,
        node: TaxonomyNode,
        *,
        scenario: ValidationScenario,
        update_search_index: bool = True,
    ) -> NodeId:
        """Persist ``node`` and return its id.

        Raises ``NodeValidationError`` or ``DuplicateNodeError`` when the node is rejected.
        """
        ...

    def load_by_ids(self, ids: Sequence[Identifier]) -> list[TaxonomyNode]: ...


@runtime_checkable
class GroupRegistry(Protocol):
    """Translate stable group uids into store ids."""

    def add(self, group: TaxonomyGroup) -> None: ...

    def id_by_uid(self, uid: Uid) -> GroupId | None: ...


@runtime_checkable
class SourceRegistry(Protocol):
    """Lookup of named dynamic sources."""

    def find_source(self, key: str) -> SourceDefinition | None: ...


@runtime_checkable
class SiteRegistry(Protocol):
    def add(self, site: Site) -> None: ...

    def is_multi_site(self) -> bool: ...

    def current_site_id(self) -> SiteId: ...

    def site_id_by_uid(self, uid: Uid) -> SiteId | None: ...


@runtime_checkable
class FieldRegistry(Protocol):
    """Custom field lookup; ``None`` means ``handle`` is not a custom field."""

    def column_name_for(self, handle: str) -> str | None: ...

    def set_value(self, node_id: Identifier, handle: str, value: object) -> None:
        """Store ``value`` in the custom field ``handle`` of one node."""
        ...

@runtime_checkable
class StructureService(Protocol):
    """Structural consistency for hierarchical node sets."""

    def fill_hierarchy_gaps(self, nodes: Sequence[TaxonomyNode]) -> list[TaxonomyNode]:
        """Return ``nodes`` with every missing ancestor attached."""
        ...
