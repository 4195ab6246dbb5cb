"""SQLAlchemy adapter package for taxofeed."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyFieldRegistry,
    SqlAlchemyGroupRegistry,
    SqlAlchemySiteRegistry,
    SqlAlchemySourceRegistry,
    SqlAlchemyTaxonomyStore,
)
from .structure import SqlAlchemyStructureService
from .unit_of_work import SqlAlchemyTaxonomyUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyFieldRegistry",
    "SqlAlchemyGroupRegistry",
    "SqlAlchemySiteRegistry",
    "SqlAlchemySourceRegistry",
    "SqlAlchemyStructureService",
    "SqlAlchemyTaxonomyStore",
    "SqlAlchemyTaxonomyUnitOfWork",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "startup",
]
