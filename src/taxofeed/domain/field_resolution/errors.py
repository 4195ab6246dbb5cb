"""Fatal resolution errors; the caller pipeline decides how to report them."""

from __future__ import annotations


class ResolutionError(RuntimeError):
    """Base class for errors that abort resolving a field for the current row."""


class SourceResolutionError(ResolutionError):
    """Raised when a field's source descriptor cannot be resolved."""


class InvalidConditionError(SourceResolutionError):
    """Raised when a dynamic source carries a condition the engine cannot build."""


class SiteResolutionError(ResolutionError):
    """Raised when a field targets a site that does not exist."""
