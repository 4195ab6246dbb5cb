"""Domain port definitions for adapters."""

from __future__ import annotations

from .conditions import Condition, ConditionEngine
from .diagnostics import DiagnosticsSink, SubFieldPopulator
from .errors import (
    DuplicateNodeError,
    NodeValidationError,
    TaxonomyQueryError,
    TaxonomyStoreError,
)
from .persistence import (
    FieldRegistry,
    GroupRegistry,
    SiteRegistry,
    SourceRegistry,
    StructureService,
    TaxonomyStore,
)
from .unit_of_work import (
    RepositoryCollection,
    TaxonomyRepositories,
    TaxonomyUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "Condition",
    "ConditionEngine",
    "DiagnosticsSink",
    "DuplicateNodeError",
    "FieldRegistry",
    "GroupRegistry",
    "NodeValidationError",
    "RepositoryCollection",
    "SiteRegistry",
    "SourceRegistry",
    "StructureService",
    "SubFieldPopulator",
    "TaxonomyQueryError",
    "TaxonomyRepositories",
    "TaxonomyStore",
    "TaxonomyStoreError",
    "TaxonomyUnitOfWork",
    "UnitOfWork",
]
