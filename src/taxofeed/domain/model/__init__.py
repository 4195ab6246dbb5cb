"""Public domain model surface."""

from __future__ import annotations

from taxofeed.domain.model.criteria import CriteriaFilter, MatchCriteria
from taxofeed.domain.model.entity import Entity
from taxofeed.domain.model.enums import FilterOperator, MatchAttribute, ValidationScenario
from taxofeed.domain.model.primitives import (
    GroupId,
    Identifier,
    NodeId,
    RawScalar,
    SiteId,
    Uid,
)
from taxofeed.domain.model.taxonomy import (
    FIELD_COLUMN_PREFIX,
    CustomField,
    Site,
    SourceDefinition,
    TaxonomyGroup,
    TaxonomyNode,
    slugify,
)

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    # criteria
    "CriteriaFilter",
    "MatchCriteria",
    # taxonomy
    "CustomField",
    "FIELD_COLUMN_PREFIX",
    "Site",
    "SourceDefinition",
    "TaxonomyGroup",
    "TaxonomyNode",
    "slugify",
    # enums
    "FilterOperator",
    "MatchAttribute",
    "ValidationScenario",
    # primitives
    "GroupId",
    "Identifier",
    "NodeId",
    "RawScalar",
    "SiteId",
    "Uid",
]
