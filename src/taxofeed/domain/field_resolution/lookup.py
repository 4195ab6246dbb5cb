"""Per-value lookup of existing taxonomy nodes."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from taxofeed.domain.model import MatchCriteria

from .contracts import LookupResult
from .errors import SiteResolutionError
from .values import is_empty_scalar, is_numeric, is_value_empty, node_key_from

if TYPE_CHECKING:
    from taxofeed.domain.ports import DiagnosticsSink, SiteRegistry, TaxonomyStore

    from .contracts import FeedContext, FieldConfig, FieldInfo, RawValue
    from .creation import CreationPolicy
    from .matching import MatchPlan
    from .sources import ResolvedSource


def resolve_site_scope(
    field_config: FieldConfig,
    feed: FeedContext,
    sites: SiteRegistry,
) -> int | None:
    """Return the site lookups are scoped to, or ``None`` on single-site installs.

    Precedence: the field's explicit target site, then the feed's site, then the
    current site.
    """

    if not sites.is_multi_site():
        return None
    if field_config.target_site_uid:
        site_id = sites.site_id_by_uid(field_config.target_site_uid)
        if site_id is None:
            raise SiteResolutionError(f"No site with uid {field_config.target_site_uid}")
        return site_id
    if feed.site_id:
        return feed.site_id
    return sites.current_site_id()


@dataclass(slots=True)
class LookupExecutor:
    store: TaxonomyStore
    sites: SiteRegistry
    creation: CreationPolicy
    diagnostics: DiagnosticsSink

    def execute(
        self,
        values: RawValue,
        *,
        plan: MatchPlan,
        source: ResolvedSource,
        field_config: FieldConfig,
        field_info: FieldInfo,
        feed: FeedContext,
    ) -> LookupResult:
        """Resolve ``values`` to node ids in input order, creating nodes where allowed."""

        default = list(field_info.default)

        # the default is already an id list
        if field_info.uses_default:
            return LookupResult(found=default)

        # the relation field's own default applies when the feed carries nothing usable;
        # "0" counts as empty here even for title/slug matches
        if is_value_empty(values):
            return LookupResult(found=default)

        allow_create = field_info.allow_create and source.allows_creation
        result = LookupResult()
        site_id: int | None = None
        site_resolved = False

        for item in values:
            # an empty filter would match every node; zero stays a valid title/slug
            if (
                is_empty_scalar(item)
                and not default
                and plan.is_special_case
                and not is_numeric(item)
            ):
                continue

            if not site_resolved:
                site_id = resolve_site_scope(field_config, feed, self.sites)
                site_resolved = True

            criteria = MatchCriteria(
                column=plan.column,
                value=item,
                site_id=site_id,
                limit=field_config.limit,
            )
            if source.condition is not None:
                criteria = source.condition.apply(criteria)

            self.diagnostics.info(
                "Search for existing category with query `{i}`",
                {"i": json.dumps(criteria.describe(), default=str)},
            )
            ids = self.store.find(criteria)
            result.found.extend(ids)
            self.diagnostics.info(
                "Found `{i}` existing categories: `{j}`",
                {"i": len(result.found), "j": json.dumps(result.found, default=str)},
            )

            if not ids and allow_create and plan.creates_by_title:
                created = self.creation.create(
                    item,
                    source.group_id,
                    criteria=criteria,
                    field_handle=field_config.handle,
                    feed=feed,
                )
                if created is not None:
                    result.found.append(created)

            result.node_key = node_key_from(field_info.node)

        return result
