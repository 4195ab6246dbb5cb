"""
Base building blocks:
store-assigned identity.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, kw_only=True)
class Entity:
    """Identity is assigned by the store when the entity is first persisted."""

    id: int | None = None
