"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Final

from sqlalchemy import exists, false, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from taxofeed.adapters.sqlalchemy.mappings import (
    category_field_value_table,
    category_group_table,
    category_source_table,
    category_table,
    custom_field_table,
    search_index_table,
    site_table,
)
from taxofeed.domain.field_resolution.errors import SiteResolutionError
from taxofeed.domain.model import (
    FIELD_COLUMN_PREFIX,
    CustomField,
    FilterOperator,
    Site,
    SourceDefinition,
    TaxonomyGroup,
    TaxonomyNode,
    ValidationScenario,
    slugify,
)
from taxofeed.domain.ports import DuplicateNodeError, NodeValidationError, TaxonomyQueryError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import Session

    from taxofeed.domain.model import Identifier, MatchCriteria, NodeId

log = logging.getLogger(__name__)

_INTEGER_COLUMNS: Final[frozenset[str]] = frozenset(
    {"id", "group_id", "site_id", "parent_id", "level"}
)
_NODE_COLUMNS: Final[frozenset[str]] = _INTEGER_COLUMNS | {"title", "slug"}

_COMPARATORS: Final[dict[FilterOperator, Callable[[Any, Any], ColumnElement[bool]]]] = {
    FilterOperator.EQ: operator.eq,
    FilterOperator.NE: operator.ne,
    FilterOperator.LT: operator.lt,
    FilterOperator.LTE: operator.le,
    FilterOperator.GT: operator.gt,
    FilterOperator.GTE: operator.ge,
}


def _as_int(value: object) -> int | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def _as_text(value: object) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _compare(
    target: Any,
    op: FilterOperator,
    value: object,
    coerce: Callable[[object], object],
) -> ColumnElement[bool]:
    if op in {FilterOperator.IN, FilterOperator.NOT_IN}:
        items = value if isinstance(value, Iterable) and not isinstance(value, str) else [value]
        coerced = [coerce(item) for item in items]
        clause = target.in_([item for item in coerced if item is not None])
        return ~clause if op is FilterOperator.NOT_IN else clause
    coerced_value = coerce(value)
    if coerced_value is None and value is not None:
        # e.g. a non-numeric value against an integer column
        return false()
    return _COMPARATORS[op](target, coerced_value)


def _column_clause(column: str, op: FilterOperator, value: object) -> ColumnElement[bool]:
    if column in _NODE_COLUMNS:
        coerce = _as_int if column in _INTEGER_COLUMNS else _as_text
        return _compare(category_table.c[column], op, value, coerce)
    if column.startswith(FIELD_COLUMN_PREFIX):
        field_value = category_field_value_table
        return exists(
            select(field_value.c.id)
            .where(field_value.c.category_id == category_table.c.id)
            .where(field_value.c.column_name == column)
            .where(_compare(field_value.c.value, op, value, _as_text))
        )
    raise TaxonomyQueryError(f"Cannot match categories on unknown column `{column}`")


class SqlAlchemyTaxonomyStore:
    """Taxonomy node store; creation runs in a savepoint of the caller's transaction."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, criteria: MatchCriteria) -> list[NodeId]:
        stmt = select(category_table.c.id).where(
            _column_clause(criteria.column, FilterOperator.EQ, criteria.value)
        )
        if criteria.site_id is not None:
            stmt = stmt.where(category_table.c.site_id == criteria.site_id)
        for item in criteria.filters:
            stmt = stmt.where(_column_clause(item.column, item.operator, item.value))
        stmt = stmt.order_by(category_table.c.id)
        if criteria.limit:
            stmt = stmt.limit(criteria.limit)
        try:
            return list(self.session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            message = f"Category lookup on `{criteria.column}` failed: {exc}"
            raise TaxonomyQueryError(message) from exc

    def create(
        self,
        node: TaxonomyNode,
        *,
        scenario: ValidationScenario,
        update_search_index: bool = True,
    ) -> NodeId:
        if node.site_id is None:
            node.site_id = self._primary_site_id()
        if not node.slug:
            node.slug = slugify(node.title) or None
        parent = self.session.get(TaxonomyNode, node.parent_id) if node.parent_id else None
        node.level = parent.level + 1 if parent is not None else 1

        errors = self._validate(node, scenario, parent=parent)
        if errors:
            raise NodeValidationError(errors)
        if scenario is ValidationScenario.ESSENTIALS and node.slug is not None:
            node.slug = self._free_slug(node, node.slug)

        try:
            with self.session.begin_nested():
                self.session.add(node)
                self.session.flush()
        except IntegrityError as exc:
            raise DuplicateNodeError(str(exc.orig)) from exc

        if node.id is None:
            raise TaxonomyQueryError("Store did not assign an id to the new category")
        if update_search_index:
            self._index(node)
        log.debug("Created category %s (%s) in group %s", node.id, node.title, node.group_id)
        return node.id

    def load_by_ids(self, ids: Sequence[Identifier]) -> list[TaxonomyNode]:
        wanted = [node_id for node_id in (_as_int(value) for value in ids) if node_id is not None]
        if not wanted:
            return []
        stmt = select(TaxonomyNode).where(category_table.c.id.in_(wanted))
        try:
            by_id = {node.id: node for node in self.session.execute(stmt).scalars()}
        except SQLAlchemyError as exc:
            raise TaxonomyQueryError(f"Loading categories failed: {exc}") from exc
        ordered = (by_id.get(node_id) for node_id in dict.fromkeys(wanted))
        return [node for node in ordered if node is not None]

    def _validate(
        self,
        node: TaxonomyNode,
        scenario: ValidationScenario,
        *,
        parent: TaxonomyNode | None,
    ) -> dict[str, list[str]]:
        errors: dict[str, list[str]] = {}
        if not node.title.strip():
            errors.setdefault("title", []).append("Title cannot be blank.")
        if node.group_id is None:
            errors.setdefault("groupId", []).append("Group cannot be blank.")
        elif self.session.get(TaxonomyGroup, node.group_id) is None:
            errors.setdefault("groupId", []).append("Group is invalid.")
        if node.site_id is None:
            errors.setdefault("siteId", []).append("Site cannot be blank.")
        if scenario is ValidationScenario.ESSENTIALS:
            return errors

        if node.slug is None:
            errors.setdefault("slug", []).append("Slug cannot be blank.")
        elif self._slug_taken(node, node.slug):
            errors.setdefault("slug", []).append(f'Slug "{node.slug}" has already been taken.')
        if node.parent_id is not None and (parent is None or parent.group_id != node.group_id):
            errors.setdefault("parentId", []).append("Parent is invalid.")
        return errors

    def _free_slug(self, node: TaxonomyNode, slug: str) -> str:
        """Return ``slug`` or the first free ``slug-N`` within the node's group and site."""
        candidate = slug
        suffix = 0
        while self._slug_taken(node, candidate):
            suffix += 1
            candidate = f"{slug}-{suffix}"
        return candidate

    def _slug_taken(self, node: TaxonomyNode, slug: str) -> bool:
        stmt = (
            select(category_table.c.id)
            .where(category_table.c.slug == slug)
            .where(category_table.c.group_id == node.group_id)
            .where(category_table.c.site_id == node.site_id)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none() is not None

    def _primary_site_id(self) -> int | None:
        stmt = select(site_table.c.id).order_by(site_table.c.primary.desc(), site_table.c.id)
        return self.session.execute(stmt.limit(1)).scalar_one_or_none()

    def _index(self, node: TaxonomyNode) -> None:
        keywords = " ".join(part for part in slugify(node.title).split("-") if part)
        stmt = search_index_table.insert().values(
            category_id=node.id,
            site_id=node.site_id,
            attribute="title",
            keywords=keywords,
        )
        self.session.execute(stmt)


class SqlAlchemyGroupRegistry:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, group: TaxonomyGroup) -> None:
        self.session.add(group)

    def id_by_uid(self, uid: str) -> int | None:
        stmt = select(category_group_table.c.id).where(category_group_table.c.uid == uid)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemySourceRegistry:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, source: SourceDefinition) -> None:
        self.session.add(source)

    def find_source(self, key: str) -> SourceDefinition | None:
        stmt = select(SourceDefinition).where(category_source_table.c.key == key)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemySiteRegistry:
    """Sites of the install; the current site is the configured handle or the primary."""

    def __init__(self, session: Session, *, current_site_handle: str | None = None) -> None:
        self.session = session
        self.current_site_handle = current_site_handle

    def add(self, site: Site) -> None:
        self.session.add(site)

    def is_multi_site(self) -> bool:
        stmt = select(func.count()).select_from(site_table)
        return self.session.execute(stmt).scalar_one() > 1

    def current_site_id(self) -> int:
        stmt = select(site_table.c.id)
        if self.current_site_handle:
            stmt = stmt.where(site_table.c.handle == self.current_site_handle)
        stmt = stmt.order_by(site_table.c.primary.desc(), site_table.c.id).limit(1)
        site_id = self.session.execute(stmt).scalar_one_or_none()
        if site_id is None:
            raise SiteResolutionError(
                f"No current site (handle={self.current_site_handle or 'primary'})"
            )
        return site_id

    def site_id_by_uid(self, uid: str) -> int | None:
        stmt = select(site_table.c.id).where(site_table.c.uid == uid)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyFieldRegistry:
    """Custom fields and the per-node values stored in their columns."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, custom_field: CustomField) -> None:
        self.session.add(custom_field)

    def column_name_for(self, handle: str) -> str | None:
        stmt = select(CustomField).where(custom_field_table.c.handle == handle)
        custom_field = self.session.execute(stmt).scalar_one_or_none()
        return custom_field.column_name if custom_field is not None else None

    def set_value(self, node_id: Identifier, handle: str, value: object) -> None:
        column_name = self.column_name_for(handle)
        if column_name is None:
            raise TaxonomyQueryError(f"Unknown custom field `{handle}`")
        category_id = _as_int(node_id)
        if category_id is None:
            raise TaxonomyQueryError(f"Invalid category id `{node_id}`")
        table = category_field_value_table
        self.session.execute(
            table.delete()
            .where(table.c.category_id == category_id)
            .where(table.c.column_name == column_name)
        )
        self.session.execute(
            table.insert().values(
                category_id=category_id,
                column_name=column_name,
                value=_as_text(value),
            )
        )


if TYPE_CHECKING:
    from typing import cast

    from taxofeed.domain.ports import (
        FieldRegistry,
        GroupRegistry,
        SiteRegistry,
        SourceRegistry,
        TaxonomyStore,
    )

    _session_stub = cast("Session", object())
    _store_check: TaxonomyStore = SqlAlchemyTaxonomyStore(_session_stub)
    _group_check: GroupRegistry = SqlAlchemyGroupRegistry(_session_stub)
    _source_check: SourceRegistry = SqlAlchemySourceRegistry(_session_stub)
    _site_check: SiteRegistry = SqlAlchemySiteRegistry(_session_stub)
    _field_check: FieldRegistry = SqlAlchemyFieldRegistry(_session_stub)
