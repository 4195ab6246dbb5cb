from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taxofeed.adapters.sqlalchemy import create_all_tables, start_mappers
from taxofeed.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyTaxonomyUnitOfWork,
    shutdown,
    startup,
)
from taxofeed.domain.model import Site, TaxonomyGroup

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True, expire_on_commit=False)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_session(sqlite_session: Session) -> Session:
    """Session holding one primary site and one category group."""

    sqlite_session.add(Site(uid="site-en", handle="en", name="English", primary=True))
    sqlite_session.add(TaxonomyGroup(uid="shop", handle="shop", name="Shop"))
    sqlite_session.commit()
    return sqlite_session


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyTaxonomyUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyTaxonomyUnitOfWork:
        return SqlAlchemyTaxonomyUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
