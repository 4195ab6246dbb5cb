"""Interpretation of a relation field's source descriptor.

Descriptors take one of two shapes:
- ``group:<uid>``: a fixed taxonomy group; new nodes may be created in it
- ``custom:<key>``: a named dynamic source filtered by a condition; there is no
  unambiguous group or parent to attach a new node to, so creation is disabled
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .errors import SourceResolutionError

if TYPE_CHECKING:
    from taxofeed.domain.ports import Condition, ConditionEngine, GroupRegistry, SourceRegistry

CUSTOM_SOURCE_PREFIX: Final[str] = "custom:"


@dataclass(frozen=True, slots=True)
class FixedGroupSource:
    group_id: int

    @property
    def condition(self) -> None:
        return None

    @property
    def allows_creation(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class DynamicSource:
    key: str
    condition: Condition

    @property
    def group_id(self) -> None:
        return None

    @property
    def allows_creation(self) -> bool:
        return False


type ResolvedSource = FixedGroupSource | DynamicSource


def resolve_source(
    descriptor: str | None,
    *,
    groups: GroupRegistry,
    sources: SourceRegistry,
    conditions: ConditionEngine,
) -> ResolvedSource:
    """Resolve ``descriptor`` or raise ``SourceResolutionError``."""

    if not descriptor:
        raise SourceResolutionError("Field has no source configured")

    if descriptor.startswith(CUSTOM_SOURCE_PREFIX):
        definition = sources.find_source(descriptor)
        if definition is None:
            raise SourceResolutionError(f"Unknown custom source: {descriptor}")
        return DynamicSource(
            key=descriptor,
            condition=conditions.create_condition(definition.condition),
        )

    _kind, separator, uid = descriptor.partition(":")
    if not separator or not uid:
        raise SourceResolutionError(f"Malformed source descriptor: {descriptor}")
    group_id = groups.id_by_uid(uid)
    if group_id is None:
        raise SourceResolutionError(f"No category group with uid {uid}")
    return FixedGroupSource(group_id=group_id)
