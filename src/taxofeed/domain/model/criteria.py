"""Immutable lookup criteria handed to the taxonomy store."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taxofeed.domain.model.enums import FilterOperator
    from taxofeed.domain.model.primitives import RawScalar


@dataclass(frozen=True, slots=True, kw_only=True)
class CriteriaFilter:
    column: str
    operator: FilterOperator
    value: object


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchCriteria:
    """Match ``column == value``, optionally scoped to a site and narrowed by filters."""

    column: str
    value: RawScalar
    site_id: int | None = None
    limit: int | None = None
    filters: tuple[CriteriaFilter, ...] = ()

    def with_filters(self, *filters: CriteriaFilter) -> MatchCriteria:
        return replace(self, filters=(*self.filters, *filters))

    def describe(self) -> dict[str, object]:
        """Return the populated criteria as a JSON-friendly mapping."""

        described: dict[str, object] = {"where": [self.column, "=", self.value]}
        if self.site_id is not None:
            described["siteId"] = self.site_id
        if self.limit:
            described["limit"] = self.limit
        if self.filters:
            described["filters"] = [
                [item.column, str(item.operator), item.value] for item in self.filters
            ]
        return described
