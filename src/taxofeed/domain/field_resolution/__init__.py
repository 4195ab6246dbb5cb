"""Resolution of category relation fields during feed imports.

The package turns loosely-typed feed values into node ids with relational
guarantees:
- matching by title, slug or a custom field column
- site scoping on multi-site installs
- conditional creation of missing nodes
- ancestor gap-filling for structure-maintaining fields
- relation limits and deduplication

Collaborators are injected as ports; nothing here imports an adapter.
"""

from __future__ import annotations

from .contracts import (
    NO_OP,
    USE_DEFAULT_NODE,
    ExtractedValue,
    FeedContext,
    FieldConfig,
    FieldInfo,
    IdentifierList,
    LookupResult,
    NoOp,
    OutcomeKind,
    ResolutionOutcome,
)
from .errors import (
    InvalidConditionError,
    ResolutionError,
    SiteResolutionError,
    SourceResolutionError,
)
from .resolver import CategoryFieldResolver

__all__ = [
    "NO_OP",
    "USE_DEFAULT_NODE",
    "CategoryFieldResolver",
    "ExtractedValue",
    "FeedContext",
    "FieldConfig",
    "FieldInfo",
    "IdentifierList",
    "InvalidConditionError",
    "LookupResult",
    "NoOp",
    "OutcomeKind",
    "ResolutionError",
    "ResolutionOutcome",
    "SiteResolutionError",
    "SourceResolutionError",
]
