"""SQLAlchemy mapping metadata for the taxofeed domain model."""

from __future__ import annotations

import logging
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    UniqueConstraint,
    orm,
)
from sqlalchemy.orm import configure_mappers

from taxofeed.domain.model import (
    CustomField,
    Site,
    SourceDefinition,
    TaxonomyGroup,
    TaxonomyNode,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Core tables -----------------------------------------------------------------

site_table = Table(
    "site",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uid", String(36), nullable=False, unique=True),
    Column("handle", String, nullable=False, unique=True),
    Column("name", String, nullable=False),
    Column("is_primary", Boolean, key="primary", nullable=False, default=False),
)

category_group_table = Table(
    "category_group",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uid", String(36), nullable=False, unique=True),
    Column("handle", String, nullable=False, unique=True),
    Column("name", String, nullable=False),
)

category_table = Table(
    "category",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String, nullable=False),
    Column("slug", String, nullable=True),
    Column("group_id", ForeignKey("category_group.id"), nullable=False),
    Column("site_id", ForeignKey("site.id"), nullable=False),
    Column("parent_id", ForeignKey("category.id"), nullable=True),
    Column("level", Integer, nullable=False, default=1),
    UniqueConstraint("site_id", "group_id", "slug"),
    Index("ix_category_title", "title"),
)

custom_field_table = Table(
    "custom_field",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("handle", String, nullable=False, unique=True),
    Column("name", String, nullable=False),
)

# Custom field values are stored per storage column (``field_<handle>``).
category_field_value_table = Table(
    "category_field_value",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("category_id", ForeignKey("category.id", ondelete="CASCADE"), nullable=False),
    Column("column_name", String, nullable=False),
    Column("value", String, nullable=True),
    UniqueConstraint("category_id", "column_name"),
    Index("ix_category_field_value_lookup", "column_name", "value"),
)

category_source_table = Table(
    "category_source",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("key", String, nullable=False, unique=True),
    Column("label", String, nullable=False),
    Column("condition", JSON, nullable=False, default=dict),
)

search_index_table = Table(
    "search_index",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("category_id", ForeignKey("category.id", ondelete="CASCADE"), nullable=False),
    Column("site_id", ForeignKey("site.id"), nullable=False),
    Column("attribute", String, nullable=False),
    Column("keywords", String, nullable=False),
    UniqueConstraint("category_id", "site_id", "attribute"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Site, site_table)
    mapper_registry.map_imperatively(TaxonomyGroup, category_group_table)
    mapper_registry.map_imperatively(TaxonomyNode, category_table)
    mapper_registry.map_imperatively(CustomField, custom_field_table)
    mapper_registry.map_imperatively(SourceDefinition, category_source_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
