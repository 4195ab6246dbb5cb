"""Ports for side-effecting collaborators that never influence resolution results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from taxofeed.domain.model import Identifier


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Fire-and-forget import diagnostics.

    ``message`` may reference ``context`` keys with ``{name}`` placeholders.
    """

    def info(self, message: str, context: Mapping[str, object]) -> None: ...

    def error(self, message: str, context: Mapping[str, object]) -> None: ...


@runtime_checkable
class SubFieldPopulator(Protocol):
    """Populate nested field values on the nodes a relation field resolved to.

    ``row`` is the flattened feed item the sub-field paths are read from.
    """

    def populate(
        self,
        ids: Sequence[Identifier],
        *,
        node_key: int | None,
        sub_fields: Mapping[str, object],
        row: Mapping[str, object],
    ) -> None: ...
