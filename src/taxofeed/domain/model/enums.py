"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class MatchAttribute(StrEnum):
    """Built-in node attributes a feed value can be matched against."""

    TITLE = "title"
    SLUG = "slug"


class ValidationScenario(StrEnum):
    """How strictly a store validates a node before saving it."""

    ESSENTIALS = "essentials"
    LIVE = "live"


class FilterOperator(StrEnum):
    EQ = "="
    NE = "!="
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    IN = "in"
    NOT_IN = "not in"
