"""Rule-based condition engine for custom category sources.

Source definitions carry a condition config such as::

    {"rules": [
        {"type": "group", "operator": "in", "uids": ["<group uid>"]},
        {"type": "level", "operator": "<=", "value": 2},
        {"type": "attribute", "attribute": "slug", "operator": "!=", "value": "misc"}
    ]}

Rules are validated with pydantic and turned into criteria filters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from taxofeed.domain.field_resolution.errors import InvalidConditionError
from taxofeed.domain.model import CriteriaFilter, FilterOperator

if TYPE_CHECKING:
    from collections.abc import Mapping

    from taxofeed.domain.model import MatchCriteria
    from taxofeed.domain.ports import GroupRegistry

ComparisonOperator = Literal["=", "!=", "<", "<=", ">", ">="]
MembershipOperator = Literal["in", "not in"]


class ConditionRuleModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class GroupRule(ConditionRuleModel):
    type: Literal["group"]
    operator: MembershipOperator = "in"
    uids: list[str] = Field(min_length=1)


class LevelRule(ConditionRuleModel):
    type: Literal["level"]
    operator: ComparisonOperator = "="
    value: int = Field(ge=1)


class AttributeRule(ConditionRuleModel):
    type: Literal["attribute"]
    attribute: str = Field(min_length=1)
    operator: ComparisonOperator = "="
    value: str | int


ConditionRule = Annotated[GroupRule | LevelRule | AttributeRule, Field(discriminator="type")]


class ConditionModel(ConditionRuleModel):
    rules: list[ConditionRule] = Field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RuleCondition:
    """Condition appending a fixed set of filters to every lookup."""

    filters: tuple[CriteriaFilter, ...] = ()

    def apply(self, criteria: MatchCriteria) -> MatchCriteria:
        return criteria.with_filters(*self.filters)


class RuleConditionEngine:
    def __init__(self, groups: GroupRegistry) -> None:
        self.groups = groups

    def create_condition(self, config: Mapping[str, object]) -> RuleCondition:
        try:
            model = ConditionModel.model_validate(dict(config))
        except ValidationError as exc:
            raise InvalidConditionError(f"Invalid source condition: {exc}") from exc
        return RuleCondition(filters=tuple(self._filter_for(rule) for rule in model.rules))

    def _filter_for(self, rule: GroupRule | LevelRule | AttributeRule) -> CriteriaFilter:
        if isinstance(rule, GroupRule):
            return CriteriaFilter(
                column="group_id",
                operator=FilterOperator(rule.operator),
                value=tuple(self._group_id(uid) for uid in rule.uids),
            )
        if isinstance(rule, LevelRule):
            return CriteriaFilter(
                column="level",
                operator=FilterOperator(rule.operator),
                value=rule.value,
            )
        return CriteriaFilter(
            column=rule.attribute,
            operator=FilterOperator(rule.operator),
            value=rule.value,
        )

    def _group_id(self, uid: str) -> int:
        group_id = self.groups.id_by_uid(uid)
        if group_id is None:
            raise InvalidConditionError(f"Source condition references unknown group {uid}")
        return group_id


if TYPE_CHECKING:
    from typing import cast

    from taxofeed.domain.ports import ConditionEngine

    _engine_check: ConditionEngine = RuleConditionEngine(cast("GroupRegistry", object()))
