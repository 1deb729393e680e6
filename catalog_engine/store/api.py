"""
Catalog data service public API.

This module defines the persistence surface the controllers are allowed to
call. Controllers must not depend on SQLite details; they speak in entity
paths, plain row mappings and the handles defined here.

Notes
-----
- Every mutation is awaitable and returns only once the write is durable.
- Contexts and bindings are cheap handles; they hold no open connection.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, Sequence

from ..data_models import EntityKey, Filter

BindingListener = Callable[["ListBinding"], None]


class EntityContext(Protocol):
    """
    Live handle to one row of an entity set.

    A context carries the snapshot it was read with. Mutations are written
    through to the store and reflected in the snapshot once acknowledged.
    """

    @property
    def entity_path(self) -> str:
        raise NotImplementedError

    @property
    def key(self) -> EntityKey:
        raise NotImplementedError

    def get_object(self) -> Mapping[str, Any]:
        """
        Return a copy of the row snapshot held by this context.

        Raises
        ------
        StaleContextError
            If the row was deleted through this context.
        """
        raise NotImplementedError

    def get_property(self, name: str) -> Any:
        """Return one field of the row snapshot."""
        raise NotImplementedError

    async def set_property(self, name: str, value: Any) -> None:
        """
        Patch one field of the row.

        Raises
        ------
        UnknownEntityError
            If the row no longer exists.
        StoreRejectedError
            If the field is not mutable or the value violates a constraint.
        """
        raise NotImplementedError

    async def delete(self) -> None:
        """
        Permanently remove the row.

        Raises
        ------
        UnknownEntityError
            If the row no longer exists.
        """
        raise NotImplementedError


class ListBinding(Protocol):
    """
    A refreshable query over one entity set.

    A new binding holds no rows until its first `refresh()`.
    """

    @property
    def entity_path(self) -> str:
        raise NotImplementedError

    @property
    def filters(self) -> tuple[Filter, ...]:
        raise NotImplementedError

    def contexts(self) -> Sequence[EntityContext]:
        """Return contexts for the rows loaded by the last refresh."""
        raise NotImplementedError

    async def refresh(self) -> None:
        """Re-run the query and notify listeners."""
        raise NotImplementedError

    def add_listener(self, listener: BindingListener) -> None:
        """Register a callback invoked after every refresh."""
        raise NotImplementedError


class CatalogService(Protocol):
    """
    Data service for the Authors/Books catalog.

    Implementations own persistence. Entity paths are ``/Authors`` and
    ``/Books``.
    """

    async def create(self, entity_path: str, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        """
        Insert a row and return it as stored.

        Parameters
        ----------
        entity_path:
            Target entity set.
        payload:
            Field values for the new row. The key is assigned by the store.

        Returns
        -------
        Mapping[str, Any]
            The created row including its key.

        Raises
        ------
        UnknownEntitySetError
            If entity_path is not known.
        StoreRejectedError
            If the payload violates a constraint.
        """
        raise NotImplementedError

    async def fetch(self, entity_path: str, key: EntityKey) -> Mapping[str, Any]:
        """
        Read one row by key, including soft-deleted rows.

        Raises
        ------
        UnknownEntityError
            If the key is not present.
        """
        raise NotImplementedError

    def bind_list(self, entity_path: str, filters: Sequence[Filter] = ()) -> ListBinding:
        """Return an unloaded binding over entity_path restricted by filters."""
        raise NotImplementedError
