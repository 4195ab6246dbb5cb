"""Errors raised by taxonomy store implementations."""

from __future__ import annotations


class TaxonomyStoreError(RuntimeError):
    """Base class for taxonomy store failures."""


class TaxonomyQueryError(TaxonomyStoreError):
    """Raised when lookup criteria cannot be turned into a store query."""


class NodeValidationError(TaxonomyStoreError):
    """Raised when a node fails validation and was not saved."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(f"Node failed validation: {errors}")
        self.errors = errors


class DuplicateNodeError(TaxonomyStoreError):
    """Raised when a store-enforced uniqueness constraint rejects a new node."""
