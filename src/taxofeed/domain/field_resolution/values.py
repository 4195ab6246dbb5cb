"""Reading mapped values out of a flattened feed row.

Rows arrive as flat mappings from node paths to scalars, e.g.
``{"categories/0/title": "Shoes", "categories/1/title": "Boots"}``. A field is mapped
to an index-free path (``categories/title``) or to the ``usedefault`` marker.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from .contracts import ExtractedValue

if TYPE_CHECKING:
    from collections.abc import Iterable

    from taxofeed.domain.model import RawScalar

    from .contracts import FeedRow, FieldInfo


def extract_values(row: FeedRow, field_info: FieldInfo, *, delimiter: str) -> ExtractedValue:
    """Collect every value the row holds for ``field_info.node``.

    The default list is returned alongside; for ``usedefault`` mappings it doubles as
    the value itself.
    """

    default = field_info.default
    if field_info.uses_default:
        return ExtractedValue(value=tuple(default), default=default)

    node = field_info.node
    if not node:
        return ExtractedValue(value=None, default=default)

    matched = False
    values: list[RawScalar] = []
    for path, node_value in row.items():
        if path != node and strip_indexes(path) != node:
            continue
        matched = True
        values.extend(_split_value(node_value, delimiter))

    if not matched:
        return ExtractedValue(value=None, default=default)
    return ExtractedValue(value=tuple(values), default=default)


def strip_indexes(path: str) -> str:
    """Drop numeric index segments: ``categories/0/title`` -> ``categories/title``."""

    return "/".join(segment for segment in path.split("/") if not segment.isdigit())


def node_key_from(node: str | None) -> int | None:
    """Return the first numeric segment of a node selector, if any."""

    if not node:
        return None
    for segment in node.split("/"):
        if segment.isdigit():
            return int(segment)
    return None


def _split_value(value: object, delimiter: str) -> list[RawScalar]:
    if isinstance(value, str):
        if delimiter and delimiter in value:
            return [part.strip() for part in value.split(delimiter)]
        return [value]
    if isinstance(value, Mapping):
        # nested structures are expected to be flattened before extraction
        return []
    if isinstance(value, Sequence):
        flattened: list[RawScalar] = []
        for item in value:
            flattened.extend(_split_value(item, delimiter))
        return flattened
    if value is None or isinstance(value, int | float | bool):
        return [value]
    return [str(value)]


def is_empty_scalar(value: RawScalar, *, allow_zero: bool = False) -> bool:
    """Return whether ``value`` counts as empty.

    ``None``, ``""``, ``"0"``, zero and ``False`` are empty; ``"0"`` is kept when
    ``allow_zero`` is set because zero is a legitimate title or slug.
    """

    if allow_zero and value == "0" and isinstance(value, str):
        return False
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value in {"", "0"}
    return value == 0


def is_value_empty(values: Iterable[RawScalar] | None, *, allow_zero: bool = False) -> bool:
    """Return whether every item in ``values`` is empty."""

    if values is None:
        return True
    return all(is_empty_scalar(item, allow_zero=allow_zero) for item in values)


def is_numeric(value: RawScalar) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float):
        return True
    if isinstance(value, str):
        try:
            float(value.strip())
        except ValueError:
            return False
        return bool(value.strip())
    return False
