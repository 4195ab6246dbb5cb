"""Translate validated feed payloads into resolution inputs."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from taxofeed.adapters.feed.schema import (
    FeedPayload,
    FieldMappingPayload,
    FieldPayload,
)
from taxofeed.config.imports import ImportConfig
from taxofeed.domain.field_resolution import FeedContext, FieldConfig, FieldInfo

if TYPE_CHECKING:
    from taxofeed.domain.model import Identifier


def translate_field_config(payload: Mapping[str, object]) -> FieldConfig:
    field = FieldPayload.model_validate(payload)
    settings = field.settings
    return FieldConfig(
        handle=field.handle,
        source=settings.source,
        maintain_hierarchy=bool(settings.maintain_hierarchy),
        branch_limit=settings.branch_limit,
        max_relations=settings.max_relations,
        target_site_uid=settings.target_site_id,
    )


def translate_field_info(payload: Mapping[str, object]) -> FieldInfo:
    mapping = FieldMappingPayload.model_validate(payload)
    return FieldInfo(
        node=mapping.node,
        default=_default_ids(mapping.default),
        match_strategy=mapping.options.match,
        allow_create=mapping.options.create,
        sub_fields=mapping.fields or None,
    )


def translate_feed_context(
    payload: Mapping[str, object],
    *,
    row_id: int | str,
    config: ImportConfig | None = None,
) -> FeedContext:
    """Build the feed context; per-feed settings override the process defaults."""

    feed = FeedPayload.model_validate(payload)
    defaults = config or ImportConfig()
    return FeedContext(
        row_id=row_id,
        site_id=feed.site_id,
        update_search_indexes=feed.update_search_indexes,
        compare_content=(
            defaults.compare_content if feed.compare_content is None else feed.compare_content
        ),
        data_delimiter=feed.data_delimiter or defaults.data_delimiter,
    )


def flatten_row(
    data: Mapping[str, object] | Sequence[object],
    prefix: str = "",
) -> dict[str, object]:
    """Flatten a nested feed item into ``path/0/child`` keys.

    Empty lists and objects stay as leaves so a present-but-empty value is not
    mistaken for an unmapped one.
    """

    items: list[tuple[str, object]]
    if isinstance(data, Mapping):
        items = [(str(key), value) for key, value in data.items()]
    else:
        items = [(str(index), value) for index, value in enumerate(data)]

    flat: dict[str, object] = {}
    for key, value in items:
        path = f"{prefix}/{key}" if prefix else key
        is_container = isinstance(value, Mapping) or (
            isinstance(value, Sequence) and not isinstance(value, str | bytes)
        )
        if is_container and value:
            flat.update(flatten_row(value, path))
        else:
            flat[path] = value
    return flat


def _default_ids(value: object) -> tuple[Identifier, ...]:
    if value is None or value == "":
        return ()
    raw = value if isinstance(value, list | tuple) else [value]
    ids: list[Identifier] = []
    for item in raw:
        if item is None or item == "":
            continue
        if isinstance(item, str) and item.strip().isdigit():
            ids.append(int(item.strip()))
        elif isinstance(item, int | str):
            ids.append(item)
        else:
            ids.append(str(item))
    return tuple(ids)
