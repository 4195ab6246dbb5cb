from __future__ import annotations

import pytest

from taxofeed.adapters.conditions import RuleCondition, RuleConditionEngine
from taxofeed.domain.field_resolution import InvalidConditionError, SourceResolutionError
from taxofeed.domain.model import CriteriaFilter, FilterOperator, MatchCriteria
from tests.helpers.taxonomy import FakeGroupRegistry


def test_engine_builds_filters_for_each_rule() -> None:
    engine = RuleConditionEngine(FakeGroupRegistry({"shop": 1, "brands": 2}))

    condition = engine.create_condition(
        {
            "rules": [
                {"type": "group", "uids": ["shop", "brands"]},
                {"type": "level", "operator": "<=", "value": 2},
                {"type": "attribute", "attribute": "slug", "operator": "!=", "value": "misc"},
            ]
        }
    )

    assert condition.filters == (
        CriteriaFilter(column="group_id", operator=FilterOperator.IN, value=(1, 2)),
        CriteriaFilter(column="level", operator=FilterOperator.LTE, value=2),
        CriteriaFilter(column="slug", operator=FilterOperator.NE, value="misc"),
    )


def test_condition_appends_filters_without_mutating_criteria() -> None:
    extra = CriteriaFilter(column="level", operator=FilterOperator.EQ, value=1)
    criteria = MatchCriteria(column="title", value="Shoes", site_id=2)

    narrowed = RuleCondition(filters=(extra,)).apply(criteria)

    assert narrowed.filters == (extra,)
    assert narrowed.site_id == 2
    assert criteria.filters == ()


def test_empty_condition_leaves_criteria_unfiltered() -> None:
    condition = RuleConditionEngine(FakeGroupRegistry()).create_condition({})

    criteria = MatchCriteria(column="title", value="Shoes")

    assert condition.apply(criteria) == criteria


@pytest.mark.parametrize(
    "config",
    [
        {"rules": [{"type": "colour", "value": "red"}]},
        {"rules": [{"type": "level", "value": 0}]},
        {"rules": [{"type": "group", "uids": []}]},
        {"rules": [{"type": "group", "operator": "<", "uids": ["shop"]}]},
    ],
)
def test_engine_rejects_invalid_configs(config: dict[str, object]) -> None:
    engine = RuleConditionEngine(FakeGroupRegistry({"shop": 1}))

    with pytest.raises(InvalidConditionError):
        engine.create_condition(config)


def test_engine_rejects_unknown_group_as_source_error() -> None:
    engine = RuleConditionEngine(FakeGroupRegistry({"shop": 1}))

    with pytest.raises(SourceResolutionError, match="unknown group"):
        engine.create_condition({"rules": [{"type": "group", "uids": ["missing"]}]})
