"""
List synchronization between the data service and the bound views.

Notes
-----
- The Author list and the Book table are refreshed independently.
- Refreshing an unbound view is a no-op, not an error.
- The Book table is only ever bound to a query scoped to one Author.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..data_models import AUTHORS_PATH, BOOKS_PATH, EntityKey, Filter, FilterOperator
from ..store.api import CatalogService, ListBinding
from .ports import ListView

logger = logging.getLogger(__name__)


class ListSynchronizer:
    """
    Keeps the Author list and the Book table consistent with the store.

    Parameters
    ----------
    service:
        Data service used to create bindings.
    author_list:
        Master list of Authors.
    book_table:
        Detail table of the selected Author's Books.
    author_filters:
        Filters applied to the Author binding (e.g. hide soft-deleted rows).
    """

    def __init__(
        self,
        service: CatalogService,
        author_list: ListView,
        book_table: ListView,
        author_filters: Sequence[Filter] = (),
    ) -> None:
        self._service = service
        self._author_list = author_list
        self._book_table = book_table
        self._author_filters = tuple(author_filters)

    async def bind_authors(self) -> ListBinding:
        binding = self._service.bind_list(AUTHORS_PATH, self._author_filters)
        self._author_list.bind_items(binding)
        await binding.refresh()
        return binding

    async def refresh_authors(self) -> bool:
        """Refresh the Author list. Returns False if it is not bound."""
        return await self._refresh(self._author_list, "authors")

    async def refresh_books(self) -> bool:
        """Refresh the Book table. Returns False if it is not bound."""
        return await self._refresh(self._book_table, "books")

    async def bind_books(self, author_id: EntityKey | None) -> ListBinding | None:
        """
        Rebind the Book table to `author_id`, or unbind it when None.

        Returns
        -------
        ListBinding | None
            The new binding, or None after unbinding.
        """
        self._book_table.unbind_items()
        if author_id is None:
            logger.debug("Book table unbound")
            return None

        binding = self._service.bind_list(
            BOOKS_PATH, (Filter("author_id", FilterOperator.EQ, author_id),)
        )
        self._book_table.bind_items(binding)
        await binding.refresh()
        logger.debug("Book table bound to author %s", author_id)
        return binding

    async def _refresh(self, view: ListView, label: str) -> bool:
        binding = view.binding()
        if binding is None:
            logger.debug("Skipped refresh of unbound %s view", label)
            return False
        await binding.refresh()
        return True
