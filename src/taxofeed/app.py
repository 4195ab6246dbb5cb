"""Application orchestration entry points."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from taxofeed.adapters.conditions import RuleConditionEngine
from taxofeed.adapters.diagnostics import LoggingDiagnostics
from taxofeed.adapters.feed import (
    flatten_row,
    translate_feed_context,
    translate_field_config,
    translate_field_info,
)
from taxofeed.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyTaxonomyUnitOfWork,
    is_started,
    startup,
)
from taxofeed.adapters.sub_fields import FieldValuePopulator
from taxofeed.config import get_import_config
from taxofeed.domain.field_resolution import CategoryFieldResolver
from taxofeed.domain.model import Site, TaxonomyGroup
from taxofeed.domain.ports.unit_of_work import TaxonomyUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Mapping

    from taxofeed.config import ImportConfig
    from taxofeed.domain.field_resolution import ResolutionOutcome
    from taxofeed.domain.ports import DiagnosticsSink, SubFieldPopulator, TaxonomyRepositories

UnitOfWorkFactory = Callable[[], TaxonomyUnitOfWork]


log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def _default_unit_of_work_factory(config: ImportConfig) -> UnitOfWorkFactory:
    _ensure_started()

    def factory() -> TaxonomyUnitOfWork:
        return SqlAlchemyTaxonomyUnitOfWork(current_site_handle=config.current_site_handle)

    return factory


def build_resolver(
    repositories: TaxonomyRepositories,
    *,
    diagnostics: DiagnosticsSink | None = None,
    sub_fields: SubFieldPopulator | None = None,
) -> CategoryFieldResolver:
    """Wire a resolver to the repositories of an open unit of work.

    Sub-field values go to the custom fields of the resolved categories unless another
    populator is passed.
    """

    sink = diagnostics or LoggingDiagnostics()
    return CategoryFieldResolver.from_repositories(
        repositories,
        conditions=RuleConditionEngine(repositories.groups),
        diagnostics=sink,
        sub_fields=sub_fields or FieldValuePopulator(repositories.fields, diagnostics=sink),
    )


def resolve_category_field(
    *,
    field: Mapping[str, object],
    mapping: Mapping[str, object],
    item: Mapping[str, object],
    feed: Mapping[str, object] | None = None,
    row_id: int | str = 0,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    import_config: ImportConfig | None = None,
) -> ResolutionOutcome:
    """Resolve one category field for one feed item and commit any created nodes."""

    config = import_config or get_import_config()
    field_config = translate_field_config(field)
    field_info = translate_field_info(mapping)
    feed_context = translate_feed_context(feed or {}, row_id=row_id, config=config)
    row = flatten_row(item)

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory(config)
    log.info(
        "Resolving field %s for row %s (source=%s, match=%s)",
        field_config.handle,
        row_id,
        field_config.source,
        field_info.match_strategy,
    )
    with effective_uow() as uow:
        resolver = build_resolver(uow.repositories)
        outcome = resolver.resolve(field_config, field_info, feed_context, row)
        uow.commit()

    log.info(f"Finished field {field_config.handle}: outcome={outcome}")
    return outcome


def create_site(
    *,
    handle: str,
    name: str,
    uid: str | None = None,
    primary: bool = False,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Site:
    """Register a site."""

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory(get_import_config())
    site = Site(uid=uid or str(uuid.uuid4()), handle=handle, name=name, primary=primary)
    with effective_uow() as uow:
        uow.repositories.sites.add(site)
        uow.commit()
    return site


def create_group(
    *,
    handle: str,
    name: str,
    uid: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> TaxonomyGroup:
    """Register a category group."""

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory(get_import_config())
    group = TaxonomyGroup(uid=uid or str(uuid.uuid4()), handle=handle, name=name)
    with effective_uow() as uow:
        uow.repositories.groups.add(group)
        uow.commit()
    return group


def initialise_database(*, database_uri: str | None = None) -> None:
    """Create the schema for the configured database."""

    if is_started():
        return
    startup(database_uri=database_uri)
