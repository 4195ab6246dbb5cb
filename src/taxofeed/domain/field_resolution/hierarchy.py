"""Ancestor expansion for structure-maintaining relation fields."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taxofeed.domain.model import Identifier
    from taxofeed.domain.ports import StructureService, TaxonomyStore


def normalize_hierarchy(
    found: Sequence[Identifier],
    *,
    maintain_hierarchy: bool,
    compare_content: bool,
    store: TaxonomyStore,
    structure: StructureService,
) -> list[Identifier]:
    """Attach every missing ancestor of the resolved nodes.

    Only runs when the field maintains a hierarchy and the feed compares content:
    two imports of the same branch must yield the same stored relations, whichever
    levels the feed happened to spell out.
    """

    if not (found and maintain_hierarchy and compare_content):
        return list(found)

    nodes = store.load_by_ids(found)
    filled = structure.fill_hierarchy_gaps(nodes)
    return [node.id for node in filled if node.id is not None]
