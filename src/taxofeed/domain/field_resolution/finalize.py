"""Relation limit and deduplication."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taxofeed.domain.model import Identifier


def finalize(found: Sequence[Identifier], limit: int | None) -> list[Identifier]:
    """Truncate to ``limit`` entries, then drop duplicates keeping first occurrences.

    Duplicates count against the limit before they are removed.
    """

    truncated = list(found[:limit]) if found and limit else list(found)
    return list(dict.fromkeys(truncated))
