"""Entry point resolving one category relation field for one feed row.

Stage order:
1) extract the mapped value and default from the row
2) short-circuit absent values (no-op) and empty value + default (clear)
3) resolve the source descriptor and plan the match column
4) look up, and optionally create, a node per candidate value
5) expand ancestors for structure-maintaining fields
6) truncate to the relation limit, then deduplicate
7) hand the ids to sub-field population

An empty final set is reported as a no-op so failed lookups never wipe relations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .contracts import NO_OP, IdentifierList
from .creation import CreationPolicy
from .finalize import finalize
from .hierarchy import normalize_hierarchy
from .lookup import LookupExecutor
from .matching import plan_match
from .sources import resolve_source
from .values import extract_values, is_value_empty

if TYPE_CHECKING:
    from taxofeed.domain.ports import (
        ConditionEngine,
        DiagnosticsSink,
        FieldRegistry,
        GroupRegistry,
        SiteRegistry,
        SourceRegistry,
        StructureService,
        SubFieldPopulator,
        TaxonomyRepositories,
        TaxonomyStore,
    )

    from .contracts import FeedContext, FeedRow, FieldConfig, FieldInfo, ResolutionOutcome

log = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class CategoryFieldResolver:
    """Resolve raw feed values for a category field into node ids."""

    store: TaxonomyStore
    groups: GroupRegistry
    sources: SourceRegistry
    sites: SiteRegistry
    fields: FieldRegistry
    structure: StructureService
    conditions: ConditionEngine
    diagnostics: DiagnosticsSink
    sub_fields: SubFieldPopulator | None = None

    @classmethod
    def from_repositories(
        cls,
        repositories: TaxonomyRepositories,
        *,
        conditions: ConditionEngine,
        diagnostics: DiagnosticsSink,
        sub_fields: SubFieldPopulator | None = None,
    ) -> CategoryFieldResolver:
        return cls(
            store=repositories.nodes,
            groups=repositories.groups,
            sources=repositories.sources,
            sites=repositories.sites,
            fields=repositories.fields,
            structure=repositories.structure,
            conditions=conditions,
            diagnostics=diagnostics,
            sub_fields=sub_fields,
        )

    def resolve(
        self,
        field_config: FieldConfig,
        field_info: FieldInfo,
        feed: FeedContext,
        row: FeedRow,
    ) -> ResolutionOutcome:
        extracted = extract_values(row, field_info, delimiter=feed.data_delimiter)
        if extracted.value is None:
            log.debug("Field %s is not mapped in row %s", field_config.handle, feed.row_id)
            return NO_OP

        plan = plan_match(field_info.match_strategy, self.fields)
        if not extracted.default and is_value_empty(
            extracted.value, allow_zero=plan.is_special_case
        ):
            return IdentifierList(ids=())

        source = resolve_source(
            field_config.source,
            groups=self.groups,
            sources=self.sources,
            conditions=self.conditions,
        )
        executor = LookupExecutor(
            store=self.store,
            sites=self.sites,
            creation=CreationPolicy(store=self.store, diagnostics=self.diagnostics),
            diagnostics=self.diagnostics,
        )
        lookup = executor.execute(
            extracted.value,
            plan=plan,
            source=source,
            field_config=field_config,
            field_info=field_info,
            feed=feed,
        )

        found = normalize_hierarchy(
            lookup.found,
            maintain_hierarchy=field_config.maintain_hierarchy,
            compare_content=feed.compare_content,
            store=self.store,
            structure=self.structure,
        )
        found = finalize(found, field_config.limit)

        if field_info.sub_fields and self.sub_fields is not None:
            self.sub_fields.populate(
                found,
                node_key=lookup.node_key,
                sub_fields=field_info.sub_fields,
                row=row,
            )

        if not found:
            return NO_OP
        return IdentifierList(ids=tuple(found))
