"""Structure consistency for category hierarchies stored in SQL."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from taxofeed.domain.model import TaxonomyNode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.orm import Session

log = logging.getLogger(__name__)


class SqlAlchemyStructureService:
    """Attach missing ancestors to node sets.

    Each node is preceded by the ancestors that are not already part of the set,
    root first, so the result reads top-down per branch.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def fill_hierarchy_gaps(self, nodes: Sequence[TaxonomyNode]) -> list[TaxonomyNode]:
        present = {node.id for node in nodes}
        filled: list[TaxonomyNode] = []
        for node in nodes:
            for ancestor in self._ancestors(node):
                if ancestor.id in present:
                    continue
                present.add(ancestor.id)
                filled.append(ancestor)
            filled.append(node)
        if len(filled) != len(nodes):
            log.debug("Filled %d structure gaps", len(filled) - len(nodes))
        return filled

    def _ancestors(self, node: TaxonomyNode) -> list[TaxonomyNode]:
        chain: list[TaxonomyNode] = []
        seen = {node.id}
        parent_id = node.parent_id
        while parent_id is not None and parent_id not in seen:
            parent = self.session.get(TaxonomyNode, parent_id)
            if parent is None:
                break
            seen.add(parent_id)
            chain.append(parent)
            parent_id = parent.parent_id
        chain.reverse()
        return chain


if TYPE_CHECKING:
    from typing import cast

    from taxofeed.domain.ports import StructureService

    _structure_check: StructureService = SqlAlchemyStructureService(cast("Session", object()))
