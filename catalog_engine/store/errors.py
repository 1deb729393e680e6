"""Domain exceptions for the catalog data service."""

from __future__ import annotations

from ..errors import CatalogError


class StoreError(CatalogError):
    """Base error for data service operations."""


class UnknownEntitySetError(StoreError):
    """Raised when an entity path does not name a known entity set."""


class UnknownEntityError(StoreError):
    """Raised when a key is not present in its entity set."""


class StoreRejectedError(StoreError):
    """Raised when the store refuses a write (constraint or unknown field)."""


class StaleContextError(StoreError):
    """Raised when an entity context is used after its row was deleted."""
