"""Writing a relation field's nested ``fields`` mapping onto the resolved categories."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from taxofeed.domain.field_resolution.values import node_key_from, strip_indexes
from taxofeed.domain.ports import TaxonomyQueryError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taxofeed.domain.model import Identifier
    from taxofeed.domain.ports import DiagnosticsSink, FieldRegistry


class FieldValuePopulator:
    """Copy sub-field values from the feed row into custom fields of the resolved nodes.

    A sub-field maps a custom field handle to a node path, given either as a string or as
    ``{"node": ..., "default": ...}``. Several values are paired with the nodes by
    position; a single value is written to every node. With a ``node_key`` only paths
    under that index are read.
    """

    def __init__(self, fields: FieldRegistry, *, diagnostics: DiagnosticsSink) -> None:
        self.fields = fields
        self.diagnostics = diagnostics

    def populate(
        self,
        ids: Sequence[Identifier],
        *,
        node_key: int | None,
        sub_fields: Mapping[str, object],
        row: Mapping[str, object],
    ) -> None:
        if not ids:
            return
        for handle, mapping in sub_fields.items():
            node, default = _node_and_default(mapping)
            values = _values_at(row, node, node_key) if node else []
            if not values and default not in (None, ""):
                values = [default]
            if not values:
                continue
            if self.fields.column_name_for(handle) is None:
                self.diagnostics.error(
                    "Sub-field `{handle}` is not a custom field, skipped.", {"handle": handle}
                )
                continue
            for index, node_id in enumerate(ids):
                if len(values) == 1:
                    value = values[0]
                elif index < len(values):
                    value = values[index]
                else:
                    break
                self._write(node_id, handle, value)

    def _write(self, node_id: Identifier, handle: str, value: object) -> None:
        try:
            self.fields.set_value(node_id, handle, value)
        except TaxonomyQueryError as exc:
            self.diagnostics.error(
                "Sub-field `{handle}` - Could not set value on category `#{id}` - `{e}`.",
                {"handle": handle, "id": node_id, "e": str(exc)},
            )
            return
        self.diagnostics.info(
            "Sub-field `{handle}` set on category `#{id}`.", {"handle": handle, "id": node_id}
        )


def _node_and_default(mapping: object) -> tuple[str | None, object]:
    if isinstance(mapping, str):
        return mapping or None, None
    if isinstance(mapping, Mapping):
        node = mapping.get("node")
        return (node if isinstance(node, str) and node else None), mapping.get("default")
    return None, None


def _values_at(row: Mapping[str, object], node: str, node_key: int | None) -> list[object]:
    wanted = strip_indexes(node)
    values: list[object] = []
    for path, raw in row.items():
        if path != node and strip_indexes(path) != wanted:
            continue
        if node_key is not None and node_key_from(path) not in (None, node_key):
            continue
        items = raw if isinstance(raw, list | tuple) else [raw]
        values.extend(item for item in items if item not in (None, ""))
    return values
