"""Domain primitives: scalar aliases shared across the resolution core.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

type NodeId = int
type SiteId = int
type GroupId = int
type Uid = str

type RawScalar = str | int | float | bool | None
type Identifier = int | str
