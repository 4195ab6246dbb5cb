"""Derive the store column a feed value is compared against."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from taxofeed.domain.model import MatchAttribute

if TYPE_CHECKING:
    from taxofeed.domain.ports import FieldRegistry

SPECIAL_MATCH_STRATEGIES: Final[frozenset[str]] = frozenset(
    {MatchAttribute.TITLE, MatchAttribute.SLUG}
)


@dataclass(frozen=True, slots=True)
class MatchPlan:
    strategy: str
    column: str
    is_special_case: bool

    @property
    def creates_by_title(self) -> bool:
        return self.strategy == MatchAttribute.TITLE


def plan_match(strategy: str, fields: FieldRegistry) -> MatchPlan:
    """Plan the lookup for ``strategy``.

    Custom field handles are swapped for their storage column so the store can filter
    on them directly.
    """

    column = fields.column_name_for(strategy) or strategy
    return MatchPlan(
        strategy=strategy,
        column=column,
        is_special_case=strategy in SPECIAL_MATCH_STRATEGIES,
    )
