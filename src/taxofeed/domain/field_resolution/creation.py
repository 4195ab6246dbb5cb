"""Creation of taxonomy nodes for feed values that matched nothing."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from taxofeed.domain.model import TaxonomyNode, ValidationScenario
from taxofeed.domain.ports import DuplicateNodeError, NodeValidationError

if TYPE_CHECKING:
    from taxofeed.domain.model import MatchCriteria, NodeId, RawScalar
    from taxofeed.domain.ports import DiagnosticsSink, TaxonomyStore

    from .contracts import FeedContext


@dataclass(slots=True)
class CreationPolicy:
    """Create a minimal node and report the outcome through diagnostics.

    Nodes are saved under the essentials scenario so unrelated required fields do not
    fail bulk creation. A rejected node yields ``None`` and never aborts the import.
    """

    store: TaxonomyStore
    diagnostics: DiagnosticsSink

    def create(
        self,
        value: RawScalar,
        group_id: int | None,
        *,
        criteria: MatchCriteria,
        field_handle: str,
        feed: FeedContext,
    ) -> NodeId | None:
        node = TaxonomyNode(title=str(value), group_id=group_id)
        if feed.site_id:
            node.site_id = feed.site_id

        try:
            node_id = self.store.create(
                node,
                scenario=ValidationScenario.ESSENTIALS,
                update_search_index=feed.update_search_indexes,
            )
        except NodeValidationError as exc:
            self.diagnostics.error(
                "`{handle}` - Category error: Could not create - `{e}`.",
                {"handle": field_handle, "e": json.dumps(exc.errors)},
            )
            return None
        except DuplicateNodeError:
            return self._adopt_concurrent_node(criteria, field_handle=field_handle)

        self.diagnostics.info(
            "`{handle}` - Category `#{id}` added.",
            {"handle": field_handle, "id": node_id},
        )
        return node_id

    def _adopt_concurrent_node(
        self,
        criteria: MatchCriteria,
        *,
        field_handle: str,
    ) -> NodeId | None:
        # Another import created the same node between our lookup and insert.
        ids = self.store.find(criteria)
        if not ids:
            self.diagnostics.error(
                "`{handle}` - Category error: Could not create - `{e}`.",
                {"handle": field_handle, "e": json.dumps({"title": ["Duplicate category"]})},
            )
            return None
        self.diagnostics.info(
            "`{handle}` - Category `#{id}` matched after concurrent creation.",
            {"handle": field_handle, "id": ids[0]},
        )
        return ids[0]
