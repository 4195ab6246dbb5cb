"""SQLAlchemy unit of work around one taxonomy resolution."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from taxofeed.adapters.sqlalchemy.mappings import create_all_tables, start_mappers
from taxofeed.adapters.sqlalchemy.repositories import (
    SqlAlchemyFieldRegistry,
    SqlAlchemyGroupRegistry,
    SqlAlchemySiteRegistry,
    SqlAlchemySourceRegistry,
    SqlAlchemyTaxonomyStore,
)
from taxofeed.adapters.sqlalchemy.structure import SqlAlchemyStructureService
from taxofeed.config.storage import get_database_config
from taxofeed.domain.ports.unit_of_work import TaxonomyRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the database adapter is used before ``startup()`` or twice."""


# Process-wide engine and session factory, populated by startup().
_engine: Engine | None = None
_sessions: sessionmaker[Session] | None = None


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to an engine, map the domain classes and create missing tables."""

    global _engine, _sessions  # noqa: PLW0603

    if _engine is not None and not force:
        raise StartupError("Taxonomy database already started. Pass force=True to rebind.")

    if engine is None:
        config = get_database_config()
        engine = create_engine(database_uri or config.uri, echo=config.echo)
    start_mappers()
    create_all_tables(engine)
    _engine = engine
    _sessions = sessionmaker(bind=engine, expire_on_commit=False)
    log.info("Taxonomy database ready at %s", engine.url)


def is_started() -> bool:
    return _engine is not None


def shutdown() -> None:
    """Dispose the engine so the next ``startup()`` can bind a fresh one."""

    global _engine, _sessions  # noqa: PLW0603

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _sessions = None


class SqlAlchemyTaxonomyUnitOfWork:
    """One session shared by the taxonomy store and its registries.

    Leaving the ``with`` block on an exception rolls back; committing is explicit.
    """

    def __init__(self, *, current_site_handle: str | None = None) -> None:
        if _sessions is None:
            raise StartupError(
                "Taxonomy database not started. Call "
                "taxofeed.adapters.sqlalchemy.unit_of_work.startup() first."
            )
        self._sessions = _sessions
        self._session: Session | None = None
        self._repositories: TaxonomyRepositories | None = None
        self.current_site_handle = current_site_handle

    def __enter__(self) -> SqlAlchemyTaxonomyUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        self._session = self._sessions()
        self._repositories = TaxonomyRepositories(
            nodes=SqlAlchemyTaxonomyStore(self._session),
            groups=SqlAlchemyGroupRegistry(self._session),
            sources=SqlAlchemySourceRegistry(self._session),
            sites=SqlAlchemySiteRegistry(
                self._session, current_site_handle=self.current_site_handle
            ),
            fields=SqlAlchemyFieldRegistry(self._session),
            structure=SqlAlchemyStructureService(self._session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self._session = None
        self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @property
    def repositories(self) -> TaxonomyRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from taxofeed.domain.ports.unit_of_work import TaxonomyUnitOfWork

    _uow_check: TaxonomyUnitOfWork = SqlAlchemyTaxonomyUnitOfWork()
