"""Ports for condition-filtered dynamic sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from taxofeed.domain.model import MatchCriteria


@runtime_checkable
class Condition(Protocol):
    """Narrow lookup criteria to the nodes a dynamic source exposes."""

    def apply(self, criteria: MatchCriteria) -> MatchCriteria: ...


@runtime_checkable
class ConditionEngine(Protocol):
    def create_condition(self, config: Mapping[str, object]) -> Condition: ...
